import uvicorn
from fastapi import FastAPI

from levefit.api.routes.admin import router as admin_router
from levefit.api.routes.affiliates import router as affiliates_router
from levefit.api.routes.checkout import router as checkout_router
from levefit.api.routes.health import router as health_router
from levefit.api.routes.internal_jobs import router as internal_jobs_router
from levefit.api.routes.kiwify_webhook import router as kiwify_webhook_router
from levefit.api.routes.points import router as points_router
from levefit.api.routes.profile import router as profile_router
from levefit.api.routes.progress import router as progress_router
from levefit.api.routes.push_notifications import router as push_notifications_router
from levefit.api.routes.stripe_webhook import router as stripe_webhook_router
from levefit.api.routes.wallet import router as wallet_router
from levefit.core.config import get_settings
from levefit.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    app = FastAPI(
        title="LeveFit API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(health_router)
    app.include_router(kiwify_webhook_router)
    app.include_router(stripe_webhook_router)
    app.include_router(wallet_router)
    app.include_router(checkout_router)
    app.include_router(affiliates_router)
    app.include_router(admin_router)
    app.include_router(push_notifications_router)
    app.include_router(progress_router)
    app.include_router(profile_router)
    app.include_router(points_router)
    app.include_router(internal_jobs_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "levefit.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
