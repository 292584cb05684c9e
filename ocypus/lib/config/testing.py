"""Settings overrides for tests.

Not imported by the monitor itself.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import ocypus.lib.config.settings as _settings_module
from ocypus.lib.config.settings import Settings, _load_settings


def set_settings(settings: Settings | None) -> None:
    """Make ``get_settings()`` return ``settings``.

    Passing None clears the override and reloads from the environment.
    """
    _settings_module._settings_override = settings
    _load_settings.cache_clear()


@contextmanager
def override_settings(**values: Any) -> Iterator[Settings]:
    """Use settings built from ``values`` for the duration of the block.

    The local ``.env`` file is ignored; environment variables still apply
    to fields not given in ``values``.
    """
    settings = Settings(_env_file=None, **values)
    set_settings(settings)
    try:
        yield settings
    finally:
        set_settings(None)
