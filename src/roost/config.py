"""Registry configuration.

RegistryConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Registry configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RegistryConfig(strict=False)
    """

    # Root state
    root_url: str = "^"  # Compiled as is; "^" yields the empty absolute pattern

    # Freeze: raise UnresolvedStates for orphaned declarations (False = log a warning)
    strict: bool = True
