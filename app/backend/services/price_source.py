import requests

from errors import TransportError
from pricing import RawSample


class HvaKosterStrommenSource:
    """Day-ahead spot prices from the public hvakosterstrommen.no API."""

    def __init__(self, base_url, area, logger, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.area = area
        self.logger = logger
        self.timeout = timeout

    def build_url(self, day):
        return f"{self.base_url}/{day.year:04d}/{day.month:02d}-{day.day:02d}_{self.area}.json"

    def fetch(self, day):
        url = self.build_url(day)
        self.logger.info("Fetching prices from API: %s", url)
        try:
            r = requests.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportError(f"Price request failed for {url}: {exc}") from exc
        if r.status_code == 404:
            self.logger.info("No prices published for %s in %s", day.isoformat(), self.area)
            return None
        try:
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as exc:
            raise TransportError(f"Price request failed for {url}: {exc}") from exc
        if not isinstance(data, list):
            raise TransportError(f"Unexpected price payload from {url}: {type(data).__name__}")
        return [self.parse_row(row) for row in data]

    @staticmethod
    def parse_row(row):
        if not isinstance(row, dict):
            row = {}
        return RawSample(
            time_start=row.get("time_start"),
            time_end=row.get("time_end"),
            spot_price=row.get("NOK_per_kWh"),
            eur_price=row.get("EUR_per_kWh"),
            exchange_rate=row.get("EXR"),
        )
