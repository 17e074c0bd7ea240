# json_table_editor/routes.py
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from json_table_editor.config import DATA_FILE
from json_table_editor.schemas import ErrorResponse, SaveResponse
from json_table_editor.store import DocumentStore, StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store() -> DocumentStore:
    return DocumentStore(DATA_FILE)


# ------------------------------
# Document endpoints
# ------------------------------
@router.get("/data", responses={500: {"model": ErrorResponse}})
def read_data(store: DocumentStore = Depends(get_store)):
    """Return the persisted document as-is."""
    try:
        return store.read()
    except StoreError:
        logger.exception("Reading the JSON file failed")
        raise HTTPException(status_code=500, detail="Unable to read the JSON file")


@router.post(
    "/data",
    response_model=SaveResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def save_data(request: Request, store: DocumentStore = Depends(get_store)):
    """
    Overwrite the persisted document with the request body.
    The body must be a JSON object or array; null and bare scalars are refused.
    """
    try:
        document = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Request body is not valid JSON")

    if not isinstance(document, (dict, list)):
        raise HTTPException(status_code=400, detail="Invalid JSON data: expected an object")

    try:
        store.replace(document)
    except StoreError:
        logger.exception("Writing the JSON file failed")
        raise HTTPException(status_code=500, detail="Unable to save the JSON file")

    return SaveResponse(success=True, message="JSON saved successfully")
