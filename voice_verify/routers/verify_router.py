from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..application.services.verification_service import VerificationService

router = APIRouter(prefix="", tags=["Verification"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def get_verification_service(request: Request) -> VerificationService:
    return request.app.state.verification_service


def render_start(request: Request, error=None) -> HTMLResponse:
    return templates.TemplateResponse(request, "start.html", {"error": error})


# ------------------------
# Step 1: capture the phone number
# ------------------------
@router.get("/", response_class=HTMLResponse)
def start(request: Request):
    return render_start(request)


# ------------------------
# Step 2: place the voice call and ask for the spoken code
# ------------------------
@router.post("/verify", response_class=HTMLResponse)
def verify(
    request: Request,
    country_code: str = Form(""),
    phone_number: str = Form(""),
    service: VerificationService = Depends(get_verification_service),
):
    result = service.start(country_code, phone_number)
    if not result.ok:
        return render_start(request, result.error.message)
    return templates.TemplateResponse(request, "verify.html", {"id": result.handle.id, "error": None})


# ------------------------
# Step 3: check the code; any failure restarts the flow
# ------------------------
@router.post("/confirm", response_class=HTMLResponse)
def confirm(
    request: Request,
    id: str = Form(""),
    token: str = Form(""),
    service: VerificationService = Depends(get_verification_service),
):
    result = service.confirm(id, token)
    if not result.ok:
        return render_start(request, result.error.message)
    return templates.TemplateResponse(request, "confirm.html", {})
