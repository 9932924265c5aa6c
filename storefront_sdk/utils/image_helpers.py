"""
Utilidades para URLs de imágenes del CDN.
"""

import re
from typing import Any, Mapping, Optional

_EXTENSION = re.compile(r"(\.[A-Za-z0-9]+)(\?.*)?$")


class ImageHelpers:
    """Helpers para imágenes devueltas por el cliente."""

    def image_for_size(self, image: Any, max_width: int, max_height: int) -> Optional[str]:
        """
        URL de la imagen redimensionada al tamaño máximo indicado.

        Inserta el sufijo ``_{ancho}x{alto}`` antes de la extensión del archivo
        y conserva el query string.

        Args:
            image: Imagen con campo ``src`` (modelo o diccionario) o la URL directamente
            max_width: Ancho máximo en píxeles
            max_height: Alto máximo en píxeles

        Returns:
            La URL redimensionada, o None si la imagen no tiene ``src``
        """
        if isinstance(image, str):
            src = image
        elif isinstance(image, Mapping):
            src = image.get("src")
        else:
            src = image.get("src") if hasattr(image, "get") else getattr(image, "src", None)

        if not src:
            return None

        match = _EXTENSION.search(src)
        if not match:
            return f"{src}_{max_width}x{max_height}"

        query = match.group(2) or ""
        return f"{src[: match.start()]}_{max_width}x{max_height}{match.group(1)}{query}"
