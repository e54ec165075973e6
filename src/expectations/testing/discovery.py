"""Discovery of ``expect_*.py`` files."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType

from expectations.core.module_loader import ExpectationsModuleLoader
from expectations.exceptions import DiscoveryError
from expectations.testing.case import TestCase, cases_for, clear_registry, sort_cases

logger = logging.getLogger(__name__)

FILE_PATTERN = "expect_*.py"


def _is_expectation_file(path: Path) -> bool:
    return path.name.startswith("expect_") and path.suffix == ".py"


def module_name(path: Path, root: Path) -> str:
    """Dotted namespace of ``path`` relative to the collection ``root``.

    ``root/expect_math.py`` is ``expect_math``, ``root/a/b/expect_math.py`` is
    ``a.b.expect_math``.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        relative = Path(path.name)
    return ".".join(relative.with_suffix("").parts)


def load_module(path: Path, name: str | None = None) -> ModuleType:
    """Load an expectation module under namespace ``name`` (default: file stem).

    Cases the module declares are added to the registry; callers replacing an
    earlier load clear its namespace first.
    """
    name = name or path.stem
    loader = ExpectationsModuleLoader(name, path)
    spec = importlib.util.spec_from_file_location(name, path, loader=loader)
    if spec is None or spec.loader is None:
        msg = f"Cannot load module from {path}"
        raise DiscoveryError(msg)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except SyntaxError as e:
        sys.modules.pop(name, None)
        msg = f"Cannot parse {path}: {e}"
        raise DiscoveryError(msg) from e
    except Exception as e:
        sys.modules.pop(name, None)
        msg = f"Cannot load {path}: {type(e).__name__}: {e}"
        raise DiscoveryError(msg) from e
    logger.debug("Loaded %s from %s", name, path)
    return module


def collect(path: Path | str | None = None) -> list[TestCase]:
    """Load ``expect_*.py`` files and return the cases they declare.

    Each file's namespace is its dotted path relative to the searched
    directory, so equally named files in different directories stay apart.
    Namespaces being loaded are cleared once, before any file loads.

    Args:
        path: File or directory to search. Defaults to current directory.

    Returns:
        Cases of every loaded module, in run order.

    Example:
        cases = collect()  # Current directory
        cases = collect("expect_math.py")  # Specific file
        cases = collect("./tests/")  # Directory
    """
    if path is None:
        path = Path.cwd()
    elif isinstance(path, str):
        path = Path(path)

    path = path.resolve()
    if not path.exists():
        msg = f"No such file or directory: {path}"
        raise DiscoveryError(msg)

    if path.is_file():
        root = path.parent
        files = [path] if _is_expectation_file(path) else []
        if not files:
            logger.warning("Skipping %s: expectation files must match %s", path, FILE_PATTERN)
    else:
        root = path
        files = sorted(path.rglob(FILE_PATTERN))

    names = [module_name(file_path, root) for file_path in files]
    for name in names:
        clear_registry(name)

    cases: list[TestCase] = []
    for file_path, name in zip(files, names):
        load_module(file_path, name)
        cases.extend(cases_for(name))
    return sort_cases(cases)
