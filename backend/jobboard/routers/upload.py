from fastapi import APIRouter, Depends, File, UploadFile, status

from jobboard.schemas import UploadResponse
from jobboard.services import UploadStorage, get_upload_storage

router = APIRouter()


@router.post("/file", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    picture: UploadFile = File(...),
    storage: UploadStorage = Depends(get_upload_storage),
):
    """Store a profile picture or logo and return its public URL."""
    # One byte past the limit is enough to reject an oversized file
    content = picture.file.read(storage.max_bytes + 1)
    return UploadResponse(url=storage.save_image(content, picture.content_type))
