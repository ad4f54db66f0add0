from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request
import time
import uuid
from yummio.core.logging_config import get_logger
from yummio.core.settings import load_settings
from yummio.models import (
    AuthResult,
    ConvertIngredientsRequest,
    ConvertIngredientsResponse,
    ConvertMeasurementRequest,
    FormattedMeasurementResponse,
    Measurement,
    MeasurementPreferenceResponse,
    MeasurementPreferenceUpdate,
    ParsedIngredient,
    ParseIngredientRequest,
    ResetPasswordRequest,
    SignInRequest,
    SignUpRequest,
    User,
)
from yummio.services.auth_service import AuthService, InMemoryUserRepository
from yummio.services.ingredient_converter import convert_ingredient_list
from yummio.services.locale_service import MeasurementPreference, PreferenceStore, build_locale_source
from yummio.services.unit_converter import convert_measurement
from yummio.utils.ingredient_parser import parse_ingredient
from yummio.utils.measurement_formatter import format_measurement

logger = get_logger(__name__)

settings = load_settings()
preference_store = PreferenceStore(
    MeasurementPreference(
        build_locale_source(settings),
        default=settings.default_measurement_system
    )
)
auth_service = AuthService(InMemoryUserRepository())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Detect the measurement system before the first request is served."""
    system = preference_store.base.resolve()
    logger.info(f"Default measurement system: {system.value} ({preference_store.base.source})")
    yield


app = FastAPI(title="Yummio Measurements API", version="0.1.0", lifespan=lifespan)

AUTH_ERROR_STATUS = {
    "MISSING_FIELDS": 400,
    "INVALID_EMAIL": 400,
    "WEAK_PASSWORD": 400,
    "INVALID_CREDENTIALS": 401,
    "ACCOUNT_NOT_FOUND": 404,
    "EMAIL_EXISTS": 409,
}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = str(uuid.uuid4())
    start = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000.0
    logger.info(
        f"{request.method} {request.url.path} {response.status_code} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    response.headers["X-Request-ID"] = request_id
    return response


def _raise_for_auth(result: AuthResult) -> AuthResult:
    if not result.success:
        raise HTTPException(
            status_code=AUTH_ERROR_STATUS.get(result.error_code, 400),
            detail={"error_code": result.error_code, "message": result.error}
        )
    return result


def session_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Token from an `Authorization: Bearer <token>` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def client_id(
    x_client_id: Optional[str] = Header(None, alias="X-Client-ID"),
    token: Optional[str] = Depends(session_token)
) -> Optional[str]:
    # Signed-in clients without a device id fall back to their session.
    if x_client_id and x_client_id.strip():
        return x_client_id.strip()
    return token


def require_client_id(client: Optional[str] = Depends(client_id)) -> str:
    if not client:
        raise HTTPException(
            status_code=400,
            detail={
                "error_code": "MISSING_CLIENT_ID",
                "message": "Send an X-Client-ID header or sign in to store a preference"
            }
        )
    return client


@app.get("/")
def read_root():
    return {"message": "Welcome to the Yummio Measurements API. Visit /docs for documentation."}


# --- Measurements ---

@app.post("/api/ingredients/parse", response_model=ParsedIngredient)
def parse_ingredient_line(request: ParseIngredientRequest):
    return parse_ingredient(request.text)


@app.post("/api/measurements/convert", response_model=Measurement)
def convert_single_measurement(request: ConvertMeasurementRequest):
    return convert_measurement(request.amount, request.from_unit, request.to_system)


@app.post("/api/measurements/format", response_model=FormattedMeasurementResponse)
def format_single_measurement(measurement: Measurement):
    return FormattedMeasurementResponse(text=format_measurement(measurement))


@app.post("/api/ingredients/convert", response_model=ConvertIngredientsResponse)
def convert_ingredients(
    request: ConvertIngredientsRequest,
    client: Optional[str] = Depends(client_id)
):
    """
    Convert ingredient lines to the requested system, or to the caller's stored preference.
    """
    system = request.system or preference_store.system_for(client)
    return ConvertIngredientsResponse(
        system=system,
        ingredients=convert_ingredient_list(request.ingredients, system)
    )


# --- Preferences ---

def _preference_response(client: Optional[str]) -> MeasurementPreferenceResponse:
    return MeasurementPreferenceResponse(
        system=preference_store.system_for(client),
        source=preference_store.source_for(client)
    )


@app.get("/api/preferences/measurement-system", response_model=MeasurementPreferenceResponse)
def get_measurement_system(client: Optional[str] = Depends(client_id)):
    return _preference_response(client)


@app.put("/api/preferences/measurement-system", response_model=MeasurementPreferenceResponse)
def set_measurement_system(
    update: MeasurementPreferenceUpdate,
    client: str = Depends(require_client_id)
):
    preference_store.set(client, update.system)
    return _preference_response(client)


@app.delete("/api/preferences/measurement-system", response_model=MeasurementPreferenceResponse)
def reset_measurement_system(client: str = Depends(require_client_id)):
    preference_store.reset(client)
    return _preference_response(client)


# --- Accounts ---

@app.post("/api/auth/sign-in", response_model=AuthResult)
def sign_in(request: SignInRequest):
    return _raise_for_auth(auth_service.sign_in(request.email, request.password))


@app.post("/api/auth/sign-up", response_model=AuthResult)
def sign_up(request: SignUpRequest):
    return _raise_for_auth(auth_service.sign_up(request.name, request.email, request.password))


@app.post("/api/auth/reset-password", response_model=AuthResult)
def reset_password(request: ResetPasswordRequest):
    return _raise_for_auth(auth_service.reset_password(request.email))


@app.post("/api/auth/sign-out")
def sign_out(token: Optional[str] = Depends(session_token)):
    return {"success": auth_service.sign_out(token)}


@app.get("/api/auth/me", response_model=User)
def current_user(token: Optional[str] = Depends(session_token)):
    user = auth_service.current_user(token)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail={"error_code": "NOT_SIGNED_IN", "message": "No user is signed in"}
        )
    return user
