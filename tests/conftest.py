import inspect
import logging
import re

import pytest

import lot
from lot._cogs.configs.configuration import OperatorSettings
from lot._core.reactor.registries import OperatorRegistry


# Make all tests in this directory and below asyncio-compatible by default.
# Due to how pytest-async checks for these markers, they should be added as early as possible.
@pytest.hookimpl(hookwrapper=True)
def pytest_pycollect_makeitem(collector, name, obj):
    if collector.funcnamefilter(name) and inspect.iscoroutinefunction(obj):
        pytest.mark.asyncio(obj)
    yield


@pytest.fixture()
def settings():
    return OperatorSettings()


@pytest.fixture()
def logger():
    return logging.getLogger('lot.test.fake.logger')


@pytest.fixture()
def hostname():
    """ A fake hostname to be used in all aiohttp/aresponses tests. """
    return 'fake-host'


#
# Mocks for Lot's internal but global variables.
#


@pytest.fixture(autouse=True)
def registry():
    """
    Ensure that the tests have a fresh new global (not re-used) registry.
    """
    old_registry = lot.get_default_registry()
    new_registry = OperatorRegistry()
    lot.set_default_registry(new_registry)
    yield new_registry
    lot.set_default_registry(old_registry)


#
# Fakes for the external parts: the watch runtime and the object store.
#


class FakeRuntime:
    def __init__(self):
        self.controllers = []
        self.runs = 0

    def register(self, controller):
        self.controllers.append(controller)

    async def run(self):
        self.runs += 1


class FakeObjectStore:
    """ An in-memory object store: the objects are stored by their keys. """

    def __init__(self, objects=None):
        self.objects = dict(objects or {})
        self.fetched = []
        self.applied = []

    async def fetch(self, key, obj, *, resource=None):
        self.fetched.append((key, resource))
        if key not in self.objects:
            raise lot.APINotFoundError(None, status=404)
        obj.replace(self.objects[key])
        return obj

    async def apply(self, obj, *, resource=None, field_manager=None, force=None):
        self.applied.append(obj)
        return obj


@pytest.fixture()
def runtime_factory():
    return FakeRuntime


@pytest.fixture()
def runtime(runtime_factory):
    return runtime_factory()


@pytest.fixture()
def client():
    return FakeObjectStore()


#
# Helpers for the logging checks.
#


@pytest.fixture()
def assert_logs(caplog):
    """
    A function to assert the logs are present (by pattern).

    The listed message patterns MUST be present, in the order specified.
    Some other log messages can also be present, but they are ignored.
    """
    def assert_logs_fn(patterns, prohibited=[], strict=False):
        __traceback_hide__ = True
        remaining_patterns = list(patterns)
        for message in caplog.messages:
            # The expected pattern is at position 0.
            # Looking-ahead: if one of the following patterns matches, while the
            # 0th does not, then the log message is missing, and we fail the test.
            for idx, pattern in enumerate(remaining_patterns):
                m = re.search(pattern, message)
                if m:
                    if idx == 0:
                        remaining_patterns[:1] = []
                        break  # out of `remaining_patterns` cycle
                    else:
                        skipped_patterns = remaining_patterns[:idx]
                        raise AssertionError(f"Few patterns were skipped: {skipped_patterns!r}")
                elif strict:
                    raise AssertionError(f"Unexpected log message: {message!r}")

            # Check that the prohibited patterns do not appear in any message.
            for pattern in prohibited:
                m = re.search(pattern, message)
                if m:
                    raise AssertionError(f"Prohibited log pattern found: {message!r} ~ {pattern!r}")

        # If all patterns have been matched in order, we are done.
        # if some are left, but the messages are over, then we fail.
        if remaining_patterns:
            raise AssertionError(f"Few patterns were missed: {remaining_patterns!r}")

    return assert_logs_fn
