import pytest

from lot._cogs.structs.references import GroupVersionKind, ObjectKey, Resource, guess_plural


@pytest.mark.parametrize('kind, plural', [
    ('Secret', 'secrets'),
    ('ConfigMap', 'configmaps'),
    ('Ingress', 'ingresses'),
    ('Status', 'statuses'),
    ('NetworkPolicy', 'networkpolicies'),
    ('Endpoints', 'endpointses'),
])
def test_plurals_are_guessed_as_kubernetes_does(kind, plural):
    assert guess_plural(kind) == plural


def test_gvk_api_version():
    assert GroupVersionKind('', 'v1', 'Secret').api_version == 'v1'
    assert GroupVersionKind('apps', 'v1', 'Deployment').api_version == 'apps/v1'


def test_resource_from_gvk():
    resource = Resource.from_gvk(GroupVersionKind('apps', 'v1', 'Deployment'))
    assert resource == Resource('apps', 'v1', 'deployments')
    assert resource.kind == 'Deployment'
    assert resource.gvk == GroupVersionKind('apps', 'v1', 'Deployment')


def test_resource_equality_ignores_the_kind():
    assert Resource('', 'v1', 'secrets', kind='Secret') == Resource('', 'v1', 'secrets')
    assert hash(Resource('', 'v1', 'secrets', kind='Secret')) == hash(Resource('', 'v1', 'secrets'))


def test_resource_unpacking():
    assert Resource(*Resource('apps', 'v1', 'deployments')) == Resource('apps', 'v1', 'deployments')


@pytest.mark.parametrize('resource, kwargs, url', [
    (Resource('', 'v1', 'secrets'), dict(), '/api/v1/secrets'),
    (Resource('', 'v1', 'secrets'), dict(namespace='ns1'), '/api/v1/namespaces/ns1/secrets'),
    (Resource('', 'v1', 'secrets'), dict(namespace='ns1', name='name1'),
     '/api/v1/namespaces/ns1/secrets/name1'),
    (Resource('apps', 'v1', 'deployments'), dict(namespace='ns1', name='name1'),
     '/apis/apps/v1/namespaces/ns1/deployments/name1'),
    (Resource('', 'v1', 'nodes', namespaced=False), dict(namespace='ns1', name='name1'),
     '/api/v1/nodes/name1'),
    (Resource('', 'v1', 'secrets'), dict(name='name1', params=dict(force='true')),
     '/api/v1/secrets/name1?force=true'),
    (Resource('', 'v1', 'secrets'), dict(server='https://host/', name='name1'),
     'https://host/api/v1/secrets/name1'),
])
def test_urls(resource, kwargs, url):
    assert resource.get_url(**kwargs) == url


def test_object_keys():
    assert str(ObjectKey(name='name1', namespace='ns1')) == 'ns1/name1'
    assert str(ObjectKey(name='name1')) == 'name1'
    assert ObjectKey('name1', 'ns1') == ObjectKey(name='name1', namespace='ns1')
    assert len({ObjectKey('name1', 'ns1'), ObjectKey('name1', 'ns1')}) == 1
