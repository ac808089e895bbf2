import pytest

import lot


class Secret(lot.Body):
    resource = lot.Resource('', 'v1', 'secrets', kind='Secret', namespaced=True)


@pytest.fixture()
def config(runtime, client):
    return lot.OperatorConfig(runtime=runtime, client=client)


@pytest.fixture()
def operator(config):
    return lot.Operator.typed(Secret, config=config)


@pytest.fixture()
def secret_cls():
    return Secret
