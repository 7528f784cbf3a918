"""Notification settings: load and save the alerting configuration."""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from dashboard.api.errors import DashboardError
from dashboard.api.gateway import ServiceGateway
from dashboard.models import NotificationConfig


class NotificationSettings:
    """Holds the current alerting configuration."""

    def __init__(self, gateway: ServiceGateway):
        self._gateway = gateway
        self.config = NotificationConfig()
        self.loading = False

    async def load(self) -> NotificationConfig:
        """Fetch the config from the server; on failure keep the current one."""
        self.loading = True
        try:
            self.config = await self._gateway.get_notification_config()
        except DashboardError as e:
            logger.error(f"Failed to fetch notification config: {e}")
        finally:
            self.loading = False
        return self.config

    async def update(self, config: NotificationConfig | Mapping[str, Any]) -> NotificationConfig:
        """Send a new config; it is stored locally only once the server accepts it."""
        if not isinstance(config, NotificationConfig):
            config = NotificationConfig.model_validate(config)
        await self._gateway.update_notification_config(config)
        self.config = config
        logger.info(f"Notification config updated (enabled={config.enabled})")
        return config
