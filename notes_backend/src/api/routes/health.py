from fastapi import APIRouter

router = APIRouter(tags=["General"])

ENDPOINTS = {
    "register": "POST /api/register",
    "login": "POST /api/login",
    "notes": "GET /api/notes (requires auth)",
    "getNote": "GET /api/notes/:id (requires auth)",
    "createNote": "POST /api/notes (requires auth)",
    "updateNote": "PUT /api/notes/:id (requires auth)",
    "deleteNote": "DELETE /api/notes/:id (requires auth)",
    "changePassword": "PUT /api/user/password (requires auth)",
    "deleteAccount": "DELETE /api/user/account (requires auth)",
}


# PUBLIC_INTERFACE
@router.get("/", summary="Health Check")
def health_check():
    """Reports that the service is up and lists the API endpoints."""
    return {"message": "Notes API is running", "endpoints": ENDPOINTS}
