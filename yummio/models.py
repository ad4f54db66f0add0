from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, constr


class MeasurementSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Measurement(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    value: float
    unit: str
    original_value: float = Field(..., alias="originalValue")
    original_unit: str = Field(..., alias="originalUnit")


class ParsedIngredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Optional[float] = None
    unit: Optional[str] = None
    ingredient: str


# --- API Payloads ---

class ParseIngredientRequest(BaseModel):
    text: str = Field(..., description="A single free-text ingredient line")


class ConvertMeasurementRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float
    from_unit: str = Field(..., alias="fromUnit")
    to_system: MeasurementSystem = Field(..., alias="toSystem")


class FormattedMeasurementResponse(BaseModel):
    text: str


class ConvertIngredientsRequest(BaseModel):
    ingredients: List[str] = Field(..., description="Ingredient lines in display order")
    system: Optional[MeasurementSystem] = Field(
        default=None,
        description="Target system; falls back to the stored measurement preference"
    )


class ConvertIngredientsResponse(BaseModel):
    system: MeasurementSystem
    ingredients: List[str]


class MeasurementPreferenceResponse(BaseModel):
    system: MeasurementSystem
    source: str


class MeasurementPreferenceUpdate(BaseModel):
    system: MeasurementSystem


# --- Accounts ---

class User(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None


class StoredUser(User):
    password: str

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, email=self.email, avatar=self.avatar)


class AuthResult(BaseModel):
    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    token: Optional[str] = None
    user: Optional[User] = None


class SignInRequest(BaseModel):
    email: constr(strip_whitespace=True) = ""
    password: str = ""


class SignUpRequest(BaseModel):
    name: constr(strip_whitespace=True) = ""
    email: constr(strip_whitespace=True) = ""
    password: str = ""


class ResetPasswordRequest(BaseModel):
    email: constr(strip_whitespace=True) = ""
