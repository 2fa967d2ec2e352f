import importlib

mod = "jsvalidator"
class LazyLoader:
    """
    Lazy loader for the jsvalidator functions to speed up startup time.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        try:
            return self._load_module(f"{mod}.{item}")
        except ModuleNotFoundError as e:
            if e.name != f"{mod}.{item}":
                raise
            raise AttributeError(f"module '{mod}' has no attribute '{item}'") from e

# Define the public names and their corresponding module paths
_mappings = {
    "validate": (f"{mod}.schema", "validate"),
    "Schema": (f"{mod}.schema", "Schema"),
    "ValidationResult": (f"{mod}.result", "ValidationResult"),
    "SchemaValidationError": (f"{mod}.result", "SchemaValidationError"),
    "valid": (f"{mod}.combinators", "valid"),
    "invalid": (f"{mod}.combinators", "invalid"),
    "flatten": (f"{mod}.combinators", "flatten"),
    "all_of": (f"{mod}.combinators", "all_of"),
    "any_of": (f"{mod}.combinators", "any_of"),
    "one_of": (f"{mod}.combinators", "one_of"),
    "not_": (f"{mod}.combinators", "not_"),
    "validate_file": (f"{mod}.validatefile", "validate_file"),
    "DEFAULT_FORMATS": (f"{mod}.formats", "DEFAULT_FORMATS"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
