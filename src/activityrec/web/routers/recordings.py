from fastapi import APIRouter, File, UploadFile
from pydantic import BaseModel, Field

from activityrec.core.modules.recording.models import RecordingView
from activityrec.errors import ValidationError
from activityrec.web.deps import AppDep, AuthTokenDep, ConfigDep
from activityrec.web.openapi import ErrorResponse, MessageResponse

router = APIRouter(tags=["recordings"])


class RecordingResponse(BaseModel):
    message: str
    recording: RecordingView


class RecordingListResponse(BaseModel):
    recordings: list[RecordingView] = Field(..., description="Recordings ordered newest first")


@router.post(
    "/recordings",
    summary="Upload recording",
    description=(
        "Upload a browser media capture as multipart form field `recording`. "
        "The returned `filepath` is served under `/uploads/<filepath>`."
    ),
    operation_id="uploadRecording",
    status_code=201,
    responses={
        201: {"description": "Recording saved"},
        400: {"model": ErrorResponse, "description": "No file uploaded"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Content type not allowed"},
    },
)
async def upload_recording(
    app: AppDep, config: ConfigDep, auth_token: AuthTokenDep, recording: UploadFile | None = File(None)
) -> RecordingResponse:
    if recording is None:
        raise ValidationError("No file uploaded")

    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    content = await recording.read(config.max_upload_size + 1)
    saved = await app.upload_recording(auth_token, recording.filename, content, recording.content_type)
    return RecordingResponse(message="Recording saved successfully", recording=saved)


@router.get(
    "/recordings/user/{user_id}",
    summary="List user recordings",
    description="Get all recordings of a user, newest first. Users may only list their own recordings.",
    operation_id="listUserRecordings",
    responses={
        200: {"description": "List of recordings"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not your recordings"},
    },
)
async def list_user_recordings(user_id: int, app: AppDep, auth_token: AuthTokenDep) -> RecordingListResponse:
    recordings = await app.get_user_recordings(auth_token, user_id)
    return RecordingListResponse(recordings=recordings)


@router.delete(
    "/recordings/{recording_id}",
    summary="Delete recording",
    description="Delete a recording and its stored file. Only the owner may delete it.",
    operation_id="deleteRecording",
    responses={
        200: {"description": "Recording deleted"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Not the owner"},
        404: {"model": ErrorResponse, "description": "Recording not found"},
    },
)
async def delete_recording(recording_id: int, app: AppDep, auth_token: AuthTokenDep) -> MessageResponse:
    await app.delete_recording(auth_token, recording_id)
    return MessageResponse(message="Recording deleted successfully")
