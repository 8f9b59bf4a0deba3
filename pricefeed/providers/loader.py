from pricefeed.config import ConfigError, Settings
from pricefeed.providers.base import FeedTransport
from pricefeed.providers.twelvedata import TwelveDataTransport


def get_transport(settings: Settings) -> FeedTransport:
    """
    Transport loader / factory.

    Reads PROVIDER from config and returns an instance of the selected transport.
    This is the single place that knows about concrete transports.
    """
    provider_name = settings.provider.strip().upper()

    if provider_name == "TWELVEDATA":
        return TwelveDataTransport(ws_url=settings.ws_url, api_key=settings.api_key)

    raise ConfigError(f"Unknown PROVIDER='{settings.provider}'. Expected: TWELVEDATA")
