import lot
from lot._cogs.structs.bodies import build_object_reference, get_annotations, get_labels


class Secret(lot.Body):
    resource = lot.Resource('', 'v1', 'secrets', kind='Secret')


def test_plain_bodies_are_not_stamped():
    assert lot.Body() == {}


def test_typed_bodies_are_stamped():
    assert Secret() == {'apiVersion': 'v1', 'kind': 'Secret'}


def test_explicit_stamps_are_kept():
    assert Secret({'apiVersion': 'v2'})['apiVersion'] == 'v2'


def test_accessors():
    body = lot.Body({'metadata': {'name': 'name1', 'namespace': 'ns1', 'uid': 'uid1',
                                  'labels': {'a': 'b'}, 'annotations': {'c': 'd'},
                                  'deletionTimestamp': '2020-01-01T00:00:00Z'}})
    assert body.name == 'name1'
    assert body.namespace == 'ns1'
    assert body.uid == 'uid1'
    assert body.labels == {'a': 'b'}
    assert body.annotations == {'c': 'd'}
    assert body.deletion_timestamp == '2020-01-01T00:00:00Z'


def test_absent_labels_and_annotations_are_none():
    body = lot.Body({'metadata': {'name': 'name1'}})
    assert body.labels is None
    assert body.annotations is None
    assert get_labels(body) is None
    assert get_annotations({}) is None


def test_empty_labels_are_not_none():
    body = lot.Body({'metadata': {'labels': {}}})
    assert body.labels == {}


def test_replacing_keeps_the_stamps():
    body = Secret({'data': {'old': 'x'}})
    body.replace({'metadata': {'name': 'name1'}})
    assert body == {'apiVersion': 'v1', 'kind': 'Secret', 'metadata': {'name': 'name1'}}


def test_replacing_with_own_stamps():
    body = Secret()
    body.replace({'apiVersion': 'v1', 'kind': 'Other'})
    assert body.kind == 'Other'


def test_object_references_skip_the_absent_fields():
    ref = build_object_reference({'apiVersion': 'v1', 'kind': 'Secret', 'metadata': {'name': 'name1'}})
    assert ref == {'apiVersion': 'v1', 'kind': 'Secret', 'name': 'name1'}
