"""
Client for the external pizza factory that fulfills placed orders.
"""
from dataclasses import dataclass
import logging
from typing import Any, Optional

import httpx

from pizza_service.core.config import get_settings

logger = logging.getLogger(__name__)


class FactoryError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, report_url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.report_url = report_url


@dataclass
class FactoryConfirmation:
    jwt: str
    report_url: Optional[str] = None


def _parse_body(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {"message": response.text}
    return data if isinstance(data, dict) else {}


class FactoryClient:
    """
    Sends orders to the factory with one synchronous POST per order.

    `transport` lets tests substitute an `httpx.MockTransport`.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    def create_order(self, diner: dict[str, Any], order: dict[str, Any]) -> FactoryConfirmation:
        """
        Submit an order for fulfillment.

        Returns:
            The factory's confirmation token and report link

        Raises:
            FactoryError: the factory was unreachable or rejected the order
        """
        url = f"{self.base_url}/api/order"
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(url, headers=headers, json={"diner": diner, "order": order})
        except httpx.HTTPError as exc:
            logger.warning("Pizza factory unreachable: %s", exc)
            raise FactoryError(f"pizza factory unreachable: {exc}") from exc

        body = _parse_body(response)
        report_url = body.get("reportUrl")

        if not response.is_success:
            message = body.get("message") or f"factory returned {response.status_code}"
            logger.warning("Pizza factory rejected order %s (%s): %s", order.get("id"), response.status_code, message)
            raise FactoryError(message, status_code=response.status_code, report_url=report_url)

        token = body.get("jwt")
        if not token:
            raise FactoryError("factory response did not include a jwt", status_code=response.status_code, report_url=report_url)

        return FactoryConfirmation(jwt=token, report_url=report_url)


def get_factory_client() -> FactoryClient:
    """Dependency that provides a factory client built from settings."""
    settings = get_settings()
    return FactoryClient(
        base_url=settings.FACTORY_URL,
        api_key=settings.FACTORY_API_KEY,
        timeout=settings.FACTORY_TIMEOUT_SECONDS,
    )
