from fastapi import APIRouter, Depends, Request
from starlette import status

from inventory_api.core.logging import log_event
from inventory_api.core.security import Identity, get_current_identity
from inventory_api.dependencies import get_auth_service
from inventory_api.schemas.auth import AuthResponse, LoginRequest, PublicUser, RegisterRequest
from inventory_api.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: Request, payload: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
	result = auth.register(payload)
	log_event("user_registered", username=result["user"].username, request_id=request.state.request_id)
	return {"message": "User registered successfully", **result}

@router.post("/login", response_model=AuthResponse)
def login(request: Request, payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
	result = auth.login(payload)
	log_event("user_login", username=result["user"].username, request_id=request.state.request_id)
	return {"message": "Login successful", **result}

@router.get("/me", response_model=PublicUser)
def me(identity: Identity = Depends(get_current_identity), auth: AuthService = Depends(get_auth_service)):
	return auth.who_am_i(identity)
