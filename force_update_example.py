import asyncio
import logging

from force_update.config.config_manager import ConfigManager
from force_update.services.force_update_manager import ForceUpdateManager
from force_update.utils.logging_utils import configure_logging, get_logger, log_exception

configure_logging(logging.INFO)

logger = get_logger(__name__)

class ForceUpdateExample:
    def __init__(self):
        self.config = ConfigManager()
        self.manager = None

    def setup(self) -> bool:
        """Load configuration and build the update manager"""
        try:
            if not self.config.load_configuration():
                return False

            if not self.config.validate_config():
                logger.error("Invalid configuration. Please check required environment variables.")
                return False

            self.manager = ForceUpdateManager.from_config(self.config)
            return True

        except Exception as e:
            log_exception(logger, "Error during setup", e)
            return False

    async def run(self):
        """Run the update gate once, as an app would at startup"""
        if not self.setup():
            return

        try:
            if await self.manager.run():
                return
            logger.info("App is up to date")
        finally:
            self.manager.close()

async def main():
    example = ForceUpdateExample()
    await example.run()

if __name__ == "__main__":
    asyncio.run(main())
