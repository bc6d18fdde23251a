import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.core.config import settings
from inventory_api.core.errors import (
	ApiError,
	api_error_handler,
	http_exception_handler,
	unhandled_exception_handler,
	validation_exception_handler,
)
from inventory_api.core.logging import log_event, request_id_middleware
from inventory_api.core.ratelimit import create_limiter, rate_limit_exceeded_handler
from inventory_api.db.seed import seed_items, seed_users
from inventory_api.db.store import InMemoryItemStore, InMemoryUserStore
from inventory_api.routers.auth import router as auth_router
from inventory_api.routers.items import router as items_router
from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService


def create_app(seed_demo_data: Optional[bool] = None) -> FastAPI:
	app = FastAPI(title=settings.APP_NAME)

	# Stores live for the life of the process.
	user_store = InMemoryUserStore()
	item_store = InMemoryItemStore()
	if settings.SEED_DEMO_DATA if seed_demo_data is None else seed_demo_data:
		seeded_users = seed_users(user_store)
		seeded_items = seed_items(item_store)
		log_event("demo_data_seeded", users=seeded_users, items=seeded_items)

	app.state.user_store = user_store
	app.state.item_store = item_store
	app.state.auth_service = AuthService(user_store)
	app.state.item_service = ItemService(item_store)
	app.state.started_at = time.monotonic()
	app.state.limiter = create_limiter()

	# Middleware
	# Added first so the request-id middleware wraps rate-limited responses too.
	app.add_middleware(SlowAPIMiddleware)
	app.middleware("http")(request_id_middleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.CORS_ORIGINS,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	# Errors (consistent {"error": ...} format)
	app.add_exception_handler(ApiError, api_error_handler)
	app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)
	app.add_exception_handler(Exception, unhandled_exception_handler)

	# Routers
	app.include_router(auth_router)
	app.include_router(items_router)

	@app.get("/api/health")
	def health():
		return {
			"status": "healthy",
			"timestamp": datetime.now(timezone.utc).isoformat(),
			"uptime": round(time.monotonic() - app.state.started_at, 3),
			"environment": settings.ENVIRONMENT,
		}

	return app

app = create_app()

if __name__ == "__main__":
	import uvicorn
	uvicorn.run(app, host=settings.HOST, port=settings.PORT)
