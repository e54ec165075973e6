import importlib.abc
from pathlib import Path
from types import ModuleType

from expectations.core.rewrite import build_injected_globals, rewrite


class ExpectationsModuleLoader(importlib.abc.SourceLoader):
    """Loader for ``expect_*.py`` modules that rewrites their expectations.

    Participates in Python's import protocol; ``expect`` calls are rewritten
    into thunks and the declaration helpers are injected into the module's
    globals before it executes.
    """

    def __init__(self, fullname: str, path: Path) -> None:
        """Initialize the loader.

        Args:
            fullname: The fully qualified module name.
            path: Path to the module file.
        """
        self.fullname = fullname
        self.path = path

    def get_filename(self, fullname: str) -> str:
        return str(self.path)

    def get_data(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def exec_module(self, module: ModuleType) -> None:
        filename = self.get_filename(module.__name__)
        source = self.get_source(module.__name__)
        if source is None:
            msg = f"Cannot get source for module {module.__name__}"
            raise ImportError(msg)

        code = compile(rewrite(source, filename=filename), filename=filename, mode="exec")
        for name, value in build_injected_globals().items():
            module.__dict__.setdefault(name, value)
        exec(code, module.__dict__)
