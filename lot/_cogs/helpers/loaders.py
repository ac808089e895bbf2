"""
Module- and file-loading to trigger the operators to be constructed.

Operators register themselves in the default registry when constructed,
so the files/modules which construct them should be loaded first.
Two loading modes are supported, both equivalent to Python CLI:

* Plain files (`lot run file.py`).
* Importable modules (`lot run -m pkg.mod`).
"""
import importlib
import importlib.abc
import importlib.util
import os.path
import sys
from typing import Iterable, cast


def preload(
        paths: Iterable[str],
        modules: Iterable[str],
) -> None:
    """
    Load the files/modules in the order given, so that operators get registered.
    """

    for idx, path in enumerate(paths):
        sys.path.insert(0, os.path.abspath(os.path.dirname(path)))
        name = f'__lot_script_{idx}__{path}'  # same pseudo-name as '__main__'
        spec = importlib.util.spec_from_file_location(name, path)
        module = importlib.util.module_from_spec(spec) if spec is not None else None
        loader = cast(importlib.abc.Loader, spec.loader) if spec is not None else None
        if module is not None and loader is not None:
            sys.modules[name] = module
            loader.exec_module(module)
        else:
            raise ImportError(f"Failed loading {path}: no module or loader.")

    for name in modules:
        importlib.import_module(name)
