import pytest

import lot


class Secret(lot.Body):
    resource = lot.Resource('', 'v1', 'secrets', kind='Secret', namespaced=True)


@pytest.fixture(autouse=True)
def _caplog_all_levels(caplog):
    caplog.set_level(0)


@pytest.fixture()
def key():
    return lot.ObjectKey(name='name1', namespace='ns1')


@pytest.fixture()
def raw_secret():
    return {
        'apiVersion': 'v1',
        'kind': 'Secret',
        'metadata': {'name': 'name1', 'namespace': 'ns1', 'uid': 'uid1',
                     'labels': {'app': 'demo'}, 'annotations': {'note': 'x'}},
        'data': {'key': 'dmFsdWU='},
    }


@pytest.fixture()
def typed_kind():
    return lot.Typed(Secret)


@pytest.fixture()
def dynamic_kind():
    return lot.Dynamic(lot.GroupVersionKind('', 'v1', 'Secret'))


@pytest.fixture(params=['typed', 'dynamic'])
def kind(request, typed_kind, dynamic_kind):
    return typed_kind if request.param == 'typed' else dynamic_kind


@pytest.fixture()
def secret_cls():
    return Secret
