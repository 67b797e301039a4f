import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from ci_dashboard.config import DashboardSettings, get_settings
from ci_dashboard.core.logging_config import setup_logging
from ci_dashboard.schemas.bootstrap import Bootstrap
from ci_dashboard.services.remote import RemoteClients
from ci_dashboard.services.sync import (
    ConfirmationGate,
    HttpNavigator,
    StateObserver,
    StaticConfirmationGate,
    SyncController,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def dashboard(
    bootstrap: Bootstrap,
    gate: Optional[ConfirmationGate] = None,
    settings: Optional[DashboardSettings] = None,
    route_org: Optional[str] = None,
    observer: Optional[StateObserver] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    configure_logging: bool = False,
) -> AsyncIterator[SyncController]:
    """
    Dashboard lifespan: wire collaborators, run the initial load, close on exit.

    Usage:
        async with dashboard(Bootstrap.from_json(raw), gate=my_gate) as controller:
            await controller.toggle(controller.state.repos[0])
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_dir)

    clients = RemoteClients.create(settings, bootstrap, transport=transport)
    async with clients:
        controller = SyncController.load(
            clients,
            gate or StaticConfirmationGate(accept=False),
            HttpNavigator(clients.http),
            settings=settings,
            route_org=route_org,
            observer=observer,
            docs_url=bootstrap.docs_url,
        )
        # Startup: initial refresh
        logger.info(f"Loading dashboard for {bootstrap.user.login}")
        await controller.start()

        yield controller

        # Shutdown: shared HTTP client is closed by RemoteClients
        logger.info("Closing dashboard")
