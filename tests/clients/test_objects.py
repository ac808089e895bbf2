import aiohttp.web
import pytest
from aresponses import ResponsesMockServer

import lot
from lot._cogs.clients.objects import APIObjectStore

RAW = {'apiVersion': 'v1', 'kind': 'Secret',
       'metadata': {'name': 'name1', 'namespace': 'ns1', 'uid': 'uid1'}}


async def test_fetching_fills_the_object(hostname, info, secret_cls, recorder):
    store = APIObjectStore(info=info)
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'get', recorder(RAW))
            obj = secret_cls()
            result = await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), obj)
    finally:
        await store.close()

    assert result is obj
    assert obj == RAW
    assert obj.uid == 'uid1'
    request, _ = recorder.requests[0]
    assert request.headers['Authorization'] == 'Bearer fake-token'
    assert request.headers['User-Agent'].startswith('lot/')


async def test_fetching_with_an_explicit_resource(hostname, info, recorder):
    resource = lot.Resource('example.com', 'v1', 'octopi', kind='Octopus')
    store = APIObjectStore(info=info)
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/apis/example.com/v1/octopi/name1', 'get', recorder({'spec': {}}))
            obj = lot.Body(apiVersion='example.com/v1', kind='Octopus')
            await store.fetch(lot.ObjectKey(name='name1'), obj, resource=resource)
    finally:
        await store.close()

    assert obj == {'apiVersion': 'example.com/v1', 'kind': 'Octopus', 'spec': {}}


async def test_fetching_guesses_the_resource_from_the_stamps(hostname, info, recorder):
    store = APIObjectStore(info=info)
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/apis/apps/v1/namespaces/ns1/deployments/name1', 'get', recorder({}))
            obj = lot.Body(apiVersion='apps/v1', kind='Deployment')
            await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), obj)
    finally:
        await store.close()

    assert len(recorder.requests) == 1


@pytest.mark.parametrize('status, error_cls', [
    (400, lot.APIClientError),
    (401, lot.APIUnauthorizedError),
    (403, lot.APIForbiddenError),
    (404, lot.APINotFoundError),
    (409, lot.APIConflictError),
    (500, lot.APIServerError),
    (503, lot.APIServerError),
])
async def test_errors_are_mapped(hostname, info, secret_cls, status, error_cls):
    status_payload = {'kind': 'Status', 'code': status, 'message': 'msg'}
    store = APIObjectStore(info=info)
    try:
        async with ResponsesMockServer() as server:
            response = aiohttp.web.json_response(status_payload, status=status)
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'get', response)
            with pytest.raises(error_cls) as err:
                await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), secret_cls())
    finally:
        await store.close()

    assert err.value.status == status
    assert err.value.code == status
    assert err.value.message == 'msg'


async def test_non_status_error_payloads_are_not_exposed(hostname, info, secret_cls):
    store = APIObjectStore(info=info)
    try:
        async with ResponsesMockServer() as server:
            response = aiohttp.web.json_response({'secret': 'data'}, status=500)
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'get', response)
            with pytest.raises(lot.APIServerError) as err:
                await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), secret_cls())
    finally:
        await store.close()

    assert err.value.message is None
    assert err.value.details is None


async def test_applying_is_a_server_side_apply(hostname, info, secret_cls, recorder):
    store = APIObjectStore(info=info)
    obj = secret_cls({'metadata': {'name': 'name1', 'namespace': 'ns1'}, 'data': {'k': 'v'}})
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'patch', recorder(RAW))
            result = await store.apply(obj)
    finally:
        await store.close()

    assert type(result) is secret_cls
    assert result == RAW
    request, payload = recorder.requests[0]
    assert request.headers['Content-Type'] == 'application/apply-patch+yaml'
    assert request.query['fieldManager'] == 'lot'
    assert request.query['force'] == 'true'
    assert payload == {'apiVersion': 'v1', 'kind': 'Secret',
                       'metadata': {'name': 'name1', 'namespace': 'ns1'}, 'data': {'k': 'v'}}


async def test_applying_with_explicit_options(hostname, info, secret_cls, recorder):
    store = APIObjectStore(info=info)
    obj = secret_cls({'metadata': {'name': 'name1', 'namespace': 'ns1'}})
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'patch', recorder(RAW))
            await store.apply(obj, field_manager='me', force=False)
    finally:
        await store.close()

    request, _ = recorder.requests[0]
    assert request.query['fieldManager'] == 'me'
    assert request.query['force'] == 'false'


async def test_applying_uses_the_settings(hostname, info, secret_cls, recorder):
    settings = lot.OperatorSettings()
    settings.applying.field_manager = 'configured'
    settings.applying.force = False
    store = APIObjectStore(info=info, settings=settings)
    obj = secret_cls({'metadata': {'name': 'name1', 'namespace': 'ns1'}})
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'patch', recorder(RAW))
            await store.apply(obj)
    finally:
        await store.close()

    request, _ = recorder.requests[0]
    assert request.query['fieldManager'] == 'configured'
    assert request.query['force'] == 'false'


async def test_applying_requires_a_name(info, secret_cls):
    store = APIObjectStore(info=info)
    with pytest.raises(ValueError, match="without a name"):
        await store.apply(secret_cls())


async def test_login_is_lazy_and_done_once(hostname, info, secret_cls, recorder, mocker):
    login_fn = mocker.Mock(return_value=info)
    store = APIObjectStore(login_fn=login_fn)
    assert not login_fn.called
    try:
        async with ResponsesMockServer() as server:
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'get', recorder(RAW))
            server.add(hostname, '/api/v1/namespaces/ns1/secrets/name1', 'get', recorder(RAW))
            await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), secret_cls())
            await store.fetch(lot.ObjectKey(name='name1', namespace='ns1'), secret_cls())
    finally:
        await store.close()

    assert login_fn.call_count == 1


async def test_no_credentials_fail_on_first_request(secret_cls):
    store = APIObjectStore()
    with pytest.raises(lot.LoginError):
        await store.fetch(lot.ObjectKey(name='name1'), secret_cls())
