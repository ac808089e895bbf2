import functools
import sys

import click.testing
import pytest

from lot.cli import main

SCRIPT1 = """
import lot

class Runtime:
    def register(self, controller): pass
    async def run(self): pass

operator = lot.Operator.untyped('', 'v1', 'Secret', config=lot.OperatorConfig(runtime=Runtime()))

@operator.on_create_or_update(labels={'app': 'demo'})
def create_or_update_fn(**_):
    pass
"""

SCRIPT2 = """
import lot

operator = lot.Operator.untyped('apps', 'v1', 'Deployment')

@operator.on_delete(annotations={'keep': lot.ABSENT})
def delete_fn(**_):
    pass
"""

BROKEN = """
import lot

operator = lot.Operator.untyped('', 'v1', 'ConfigMap')

@operator.on_create_or_update(labels={'-bad-': 'value'})
def broken_fn(**_):
    pass
"""


@pytest.fixture(autouse=True)
def srcdir(tmpdir):
    tmpdir.join('handler1.py').write(SCRIPT1)
    tmpdir.join('handler2.py').write(SCRIPT2)
    tmpdir.join('broken.py').write(BROKEN)
    pkgdir = tmpdir.mkdir('package')
    pkgdir.join('__init__.py').write('')
    pkgdir.join('module_1.py').write(SCRIPT1)
    pkgdir.join('module_2.py').write(SCRIPT2)

    sys.path.insert(0, str(tmpdir))
    try:
        with tmpdir.as_cwd():
            yield tmpdir
    finally:
        sys.path.remove(str(tmpdir))


@pytest.fixture(autouse=True)
def clean_modules_cache():
    # Otherwise, the first loaded test-modules remain there forever,
    # preventing 2nd and further tests from passing.
    for key in list(sys.modules.keys()):
        if key.startswith('package'):
            del sys.modules[key]


@pytest.fixture(autouse=True)
def no_logging_configuration(mocker):
    return mocker.patch('lot._core.actions.loggers.configure')


@pytest.fixture()
def runner():
    runner = click.testing.CliRunner()
    return runner


@pytest.fixture()
def invoke(runner):
    return functools.partial(runner.invoke, main)


@pytest.fixture()
def real_run(mocker):
    return mocker.patch('lot._core.reactor.running.run')
