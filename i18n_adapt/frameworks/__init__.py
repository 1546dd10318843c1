"""Framework adapters (React, Vue, Angular)."""

from __future__ import annotations

from i18n_adapt.errors import UnsupportedFrameworkError
from i18n_adapt.frameworks.angular import AngularAdapter
from i18n_adapt.frameworks.base import FrameworkAdapter
from i18n_adapt.frameworks.react import ReactAdapter
from i18n_adapt.frameworks.vue import VueAdapter
from i18n_adapt.models import Framework

ADAPTERS = {
    Framework.REACT: ReactAdapter,
    Framework.VUE: VueAdapter,
    Framework.ANGULAR: AngularAdapter,
}


def get_adapter(framework: Framework | str) -> FrameworkAdapter:
    """Return the adapter for ``framework``.

    Raises:
        UnsupportedFrameworkError: No adapter exists for the name
    """
    try:
        return ADAPTERS[Framework(framework)]()
    except ValueError:
        raise UnsupportedFrameworkError(f"Unsupported framework: {framework}") from None


__all__ = ["ADAPTERS", "FrameworkAdapter", "get_adapter"]
