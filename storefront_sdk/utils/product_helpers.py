"""
Utilidades para trabajar con productos devueltos por el cliente.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    getter = getattr(obj, "get", None)
    if callable(getter):
        return getter(key, default)
    return getattr(obj, key, default)


class ProductHelpers:
    """Helpers para productos (modelos del cliente o diccionarios)."""

    def variant_for_options(self, product: Any, options: Dict[str, str]) -> Optional[Any]:
        """
        Busca la variante cuyas opciones seleccionadas coinciden con ``options``.

        Args:
            product: Producto con ``variants`` (cada una con ``selectedOptions``)
            options: Mapa nombre de opción -> valor (ej: {"Size": "M", "Color": "Red"})

        Returns:
            La variante que coincide con todas las opciones, o None
        """
        variants: Iterable[Any] = _get(product, "variants") or []

        for variant in variants:
            selected = {_get(option, "name"): _get(option, "value") for option in _get(variant, "selectedOptions") or []}
            if all(selected.get(name) == value for name, value in options.items()):
                return variant

        logger.debug(f"No variant matches options {options}")
        return None
