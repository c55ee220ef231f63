from typing import Any, Dict, Optional
from bisaya.errors import BisayaError, ErrorVal
from bisaya.types import TypeSpec, default_value


class Environment:
    """Maps identifiers to values for one Bisaya++ run.

    Declared types come from the parser and are shared by every
    environment chained to the same root. A child environment is only
    created when block scoping is switched on; by default the whole
    program runs against a single namespace.
    """
    def __init__(self, parent: Optional['Environment'] = None,
                 types: Optional[Dict[str, TypeSpec]] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        if types is None:
            types = parent.types if parent is not None else {}
        self.types: Dict[str, TypeSpec] = types

    def declared_type(self, name: str) -> Optional[TypeSpec]:
        return self.types.get(name)

    def is_bound(self, name: str) -> bool:
        if name in self.values:
            return True
        return self.parent is not None and self.parent.is_bound(name)

    def get(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        if self.parent:
            return self.parent.get(name)
        raise BisayaError(ErrorVal('NameError', f"undefined variable '{name}'"))

    def set(self, name: str, value: Any):
        # Rebind where the name already lives, otherwise create it here
        if name in self.values or self.parent is None or not self.parent.is_bound(name):
            self.values[name] = value
        else:
            self.parent.set(name, value)

    def declare(self, name: str, value: Any = None) -> Any:
        """Bind `name` in this environment.

        Without a value the declared type picks the default. Declaring a
        name twice simply rebinds it.
        """
        if value is None:
            value = default_value(self.declared_type(name))
        self.values[name] = value
        return value
