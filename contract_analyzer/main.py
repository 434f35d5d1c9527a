import sys

import uvicorn

from contract_analyzer.api.app import create_app
from contract_analyzer.config.settings import ConfigurationError, Settings
from contract_analyzer.logging.logger import Log


def main() -> None:
    """Entry point: settings -> logging -> credential check -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        settings.require_provider_credentials()
        app = create_app(settings)
    except ConfigurationError as exc:
        Log.error(f"Configuration error: {exc}")
        sys.exit(1)

    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
