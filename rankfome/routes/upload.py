# rankfome/routes/upload.py
import logging
import uuid
from pathlib import Path

from fastapi import APIRouter, Depends, File, Request, UploadFile

from ..config import Settings, get_settings
from ..errors import ValidationFailure
from ..schemas import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/Upload", tags=["Upload"])


def images_dir(settings: Settings) -> Path:
    path = settings.upload_dir / "images"
    path.mkdir(parents=True, exist_ok=True)
    return path


@router.post("", response_model=UploadResponse)
async def upload_imagem(
    request: Request,
    file: UploadFile = File(...),
    settings: Settings = Depends(get_settings),
) -> UploadResponse:
    """
    Recebe uma imagem (jpg, jpeg, png, gif, webp; até 5MB), salva em
    <upload_dir>/images/ com nome aleatório e devolve a URL pública.
    """
    if file.size == 0:
        raise ValidationFailure("Arquivo não enviado")

    extension = Path(file.filename or "").suffix.lower()
    if extension not in settings.upload_extensions:
        raise ValidationFailure(
            "Formato de imagem não suportado. Use: jpg, jpeg, png, gif ou webp"
        )
    if file.size is not None and file.size > settings.upload_max_bytes:
        raise ValidationFailure("Imagem muito grande. Máximo: 5MB")

    # lê no máximo limite+1 bytes: cobre uploads sem tamanho conhecido
    content = await file.read(settings.upload_max_bytes + 1)
    if not content:
        raise ValidationFailure("Arquivo não enviado")
    if len(content) > settings.upload_max_bytes:
        raise ValidationFailure("Imagem muito grande. Máximo: 5MB")

    name = f"{uuid.uuid4()}{extension}"
    (images_dir(settings) / name).write_bytes(content)
    logger.info("imagem %s salva (%d bytes)", name, len(content))

    base = str(request.base_url).rstrip("/")
    return UploadResponse(url=f"{base}/images/{name}")
