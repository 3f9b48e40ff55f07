"""Image decoding and encoding for the rendering surface."""

import io
from PIL import Image, UnidentifiedImageError
from core.config import settings
from core.exceptions import RenderError
from core.logging import log

# Optional HEIC/HEIF support
try:
    import pillow_heif
    pillow_heif.register_heif_opener()
    HEIF_AVAILABLE = True
except ImportError:
    HEIF_AVAILABLE = False
    log.warning("pillow-heif not installed. HEIC/HEIF support will be limited.")


class FileHandler:
    """Turns encoded image bytes into a drawable surface and back."""
    
    @staticmethod
    def load_image(image_bytes: bytes) -> Image.Image:
        """Decode image bytes into an RGB surface of native dimensions.
        
        Args:
            image_bytes: Encoded image (JPG, PNG, WEBP, HEIC, ...)
            
        Returns:
            Image.Image: Loaded image in RGB format
            
        Raises:
            RenderError: If the bytes cannot be decoded
        """
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
            log.error(f"Failed to decode image: {str(e)}")
            raise RenderError(f"Failed to decode image: {str(e)}", cause=e)
        
        image_format = image.format or "unknown"
        
        # Convert to RGB if necessary
        if image.mode != 'RGB':
            log.info(f"Converting {image.mode} to RGB")
            image = image.convert('RGB')
        
        log.info(f"Image loaded: {image.size}, format: {image_format}")
        return image
    
    @staticmethod
    def encode_jpeg(image: Image.Image, quality: int = None) -> bytes:
        """Encode a surface as JPEG.
        
        Args:
            image: Surface to encode
            quality: JPEG quality 1-95 (default from settings.JPEG_QUALITY)
            
        Returns:
            bytes: Encoded JPEG
            
        Raises:
            RenderError: If encoding fails
        """
        quality = quality or settings.JPEG_QUALITY
        buffer = io.BytesIO()
        try:
            image.convert('RGB').save(buffer, format='JPEG', quality=quality)
        except (OSError, ValueError) as e:
            log.error(f"Failed to encode JPEG: {str(e)}")
            raise RenderError(f"Failed to encode image: {str(e)}", cause=e)
        return buffer.getvalue()
