import dataclasses
import functools
from typing import Any, Callable, List, Optional

import click

from lot import operators
from lot._cogs.helpers import loaders, versions
from lot._core.actions import loggers
from lot._core.reactor import registries, running


@dataclasses.dataclass()
class CLIControls:
    """ Controls for the embedded runs, which are impossible to pass via CLI. """
    registry: Optional[registries.OperatorRegistry] = None


class LogFormatParamType(click.Choice):

    def __init__(self) -> None:
        super().__init__(choices=[v.name.lower() for v in loggers.LogFormat])

    def convert(self, value: Any, param: Any, ctx: Any) -> loggers.LogFormat:
        if isinstance(value, loggers.LogFormat):
            return value
        name: str = super().convert(value, param, ctx)
        return loggers.LogFormat[name.upper()]


def logging_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """ A decorator to configure logging in all commands the same way."""
    @click.option('-v', '--verbose', is_flag=True)
    @click.option('-d', '--debug', is_flag=True)
    @click.option('-q', '--quiet', is_flag=True)
    @click.option('--log-format', type=LogFormatParamType(), default='full')
    @click.option('--log-refkey', type=str)
    @click.option('--log-prefix/--no-log-prefix', default=None)
    @functools.wraps(fn)  # to preserve other opts/args
    def wrapper(verbose: bool, quiet: bool, debug: bool,
                log_format: loggers.LogFormat = loggers.LogFormat.FULL,
                log_prefix: Optional[bool] = False,
                log_refkey: Optional[str] = None,
                *args: Any, **kwargs: Any) -> Any:
        loggers.configure(debug=debug, verbose=verbose, quiet=quiet,
                          log_format=log_format, log_refkey=log_refkey, log_prefix=log_prefix)
        return fn(*args, **kwargs)

    return wrapper


@click.version_option(version=versions.version, prog_name='lot')
@click.group(name='lot', context_settings=dict(
    auto_envvar_prefix='LOT',
))
def main() -> None:
    pass


@main.command()
@logging_options
@click.option('-m', '--module', 'modules', multiple=True)
@click.argument('paths', nargs=-1)
@click.make_pass_decorator(CLIControls, ensure=True)
def run(
        __controls: CLIControls,
        paths: List[str],
        modules: List[str],
) -> None:
    """ Start the operators from the given files and modules. """
    loaders.preload(
        paths=paths,
        modules=modules,
    )
    return running.run(
        registry=__controls.registry,
    )


@main.command()
@logging_options
@click.option('-m', '--module', 'modules', multiple=True)
@click.argument('paths', nargs=-1)
@click.make_pass_decorator(CLIControls, ensure=True)
def check(
        __controls: CLIControls,
        paths: List[str],
        modules: List[str],
) -> None:
    """ Load the operators and compose their predicates, but do not start them. """
    loaders.preload(
        paths=paths,
        modules=modules,
    )
    registry = __controls.registry if __controls.registry is not None else registries.get_default_registry()

    failed = 0
    for operator in registry:
        click.echo(f"{operator.name} ({operator.kind.resource!r}):")
        for title, fn in [('create-or-update', operator.handlers.create_or_update),
                          ('delete', operator.handlers.delete)]:
            if fn is not None:
                click.echo(f"  on {title}: {getattr(fn, '__qualname__', repr(fn))}")
        try:
            operator.predicate()
        except operators.ConfigurationError as e:
            failed += 1
            for error in e.errors:
                click.echo(f"  error: {error}", err=True)

    if not len(registry):
        click.echo("No operators are registered.")
    if failed:
        raise click.ClickException(f"{failed} operator(s) are misconfigured.")
