import aiohttp.web
import pytest

import lot


class Secret(lot.Body):
    resource = lot.Resource('', 'v1', 'secrets', kind='Secret', namespaced=True)


@pytest.fixture()
def info(hostname):
    return lot.ConnectionInfo(server=f'https://{hostname}', token='fake-token')


@pytest.fixture()
def secret_cls():
    return Secret


@pytest.fixture()
def recorder():
    """
    A factory of server-side handlers, which remember the requests with the payloads.

    The request's content can be read inside of the handler only. We preserve
    the data into a list, so that they could be asserted later.
    """
    requests = []

    def make_handler(data=None, status=200):
        async def handler(request):
            payload = await request.json() if request.can_read_body else None
            requests.append((request, payload))
            return aiohttp.web.json_response(data if data is not None else {}, status=status)
        return handler

    make_handler.requests = requests
    return make_handler
