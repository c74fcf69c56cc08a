# --- Generator configuration -------------------------------------------------
import os
from dataclasses import dataclass, replace
from typing import Optional

VM_PKG = "github.com/goby-lang/goby/vm"
ERRORS_PKG = "github.com/goby-lang/goby/vm/errors"


@dataclass(frozen=True)
class BinderConfig:
    """Knobs shared by the classifier and the generator."""
    vm_pkg: str = VM_PKG  # import path of the host runtime
    errors_pkg: str = ERRORS_PKG  # import path of the runtime's error kinds
    marker_type: str = "Object"  # bare result type that marks a bindable method
    script_ext: str = "gb"  # extension of the resource file named in the registration
    output: str = "bindings.go"

    @classmethod
    def from_env(cls) -> "BinderConfig":
        """
        Builds a config from BINDER_* environment variables, falling back to
        the defaults for anything unset.
        """
        env = os.environ
        defaults = cls()
        return cls(
            vm_pkg=env.get("BINDER_VM_PKG", defaults.vm_pkg),
            errors_pkg=env.get("BINDER_ERRORS_PKG", defaults.errors_pkg),
            marker_type=env.get("BINDER_MARKER_TYPE", defaults.marker_type),
            script_ext=env.get("BINDER_SCRIPT_EXT", defaults.script_ext),
            output=env.get("BINDER_OUTPUT", defaults.output),
        )

    def override(self, **values: Optional[str]) -> "BinderConfig":
        """Returns a copy with every non-None value applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})
