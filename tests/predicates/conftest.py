import pytest


def make_body(labels=None, annotations=None, name='name1', namespace='ns1'):
    metadata = {'name': name, 'namespace': namespace}
    if labels is not None:
        metadata['labels'] = labels
    if annotations is not None:
        metadata['annotations'] = annotations
    return {'apiVersion': 'v1', 'kind': 'Secret', 'metadata': metadata}


@pytest.fixture()
def body_factory():
    return make_body
