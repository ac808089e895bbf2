import pytest

import lot


def test_typed_kind_creates_instances_of_the_class(typed_kind, secret_cls):
    obj = typed_kind.new()
    assert type(obj) is secret_cls
    assert obj == {'apiVersion': 'v1', 'kind': 'Secret'}


def test_typed_kind_creates_new_instances_every_time(typed_kind):
    assert typed_kind.new() is not typed_kind.new()


def test_dynamic_kind_creates_stamped_bodies(dynamic_kind):
    obj = dynamic_kind.new()
    assert type(obj) is lot.Body
    assert obj.api_version == 'v1'
    assert obj.kind == 'Secret'


@pytest.mark.parametrize('group, version, kind, api_version, plural', [
    ('', 'v1', 'Secret', 'v1', 'secrets'),
    ('apps', 'v1', 'Deployment', 'apps/v1', 'deployments'),
    ('networking.k8s.io', 'v1', 'Ingress', 'networking.k8s.io/v1', 'ingresses'),
    ('policy', 'v1beta1', 'PodSecurityPolicy', 'policy/v1beta1', 'podsecuritypolicies'),
])
def test_dynamic_kind_guesses_the_resource(group, version, kind, api_version, plural):
    dynamic = lot.Dynamic(lot.GroupVersionKind(group, version, kind))
    assert dynamic.resource == lot.Resource(group, version, plural)
    assert dynamic.resource.api_version == api_version
    assert dynamic.resource.kind == kind
    assert dynamic.new().api_version == api_version


def test_dynamic_kind_with_an_explicit_plural():
    dynamic = lot.Dynamic(lot.GroupVersionKind('example.com', 'v1', 'Octopus'), plural='octopi')
    assert dynamic.resource.plural == 'octopi'


def test_kinds_name_the_controllers(typed_kind, dynamic_kind):
    assert typed_kind.name == 'secret'
    assert dynamic_kind.name == 'secret'


def test_kinds_expose_the_gvk(typed_kind, dynamic_kind):
    assert typed_kind.gvk == lot.GroupVersionKind('', 'v1', 'Secret')
    assert dynamic_kind.gvk == lot.GroupVersionKind('', 'v1', 'Secret')
