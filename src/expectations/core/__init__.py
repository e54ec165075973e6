from .module_loader import ExpectationsModuleLoader
from .rewrite import ExpectRewriteTransformer, build_injected_globals, rewrite

__all__ = [
    "ExpectRewriteTransformer",
    "ExpectationsModuleLoader",
    "build_injected_globals",
    "rewrite",
]
