"""
Flutterwave v3 HTTP client.

Used when a gateway secret key is configured. One request per call, no
retries; every call is bounded by the configured timeout.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from src.checkout.payloads import redact_payload
from src.checkout.validation import is_valid_transaction_id
from src.integrations.contracts.interfaces import GatewayResult, PaymentGateway, PaymentMethod
from src.integrations.policy.response_wrappers import (
    DEFAULT_FAILURE_MESSAGE,
    GatewayConfigurationError,
    GatewayTimeoutError,
    GatewayTransportError,
    IntegrationResponseError,
    error_message_from_body,
    normalize_charge_response,
    normalize_verify_response,
)

logger = logging.getLogger(__name__)


class FlutterwaveClient(PaymentGateway):
    def __init__(
        self,
        secret_key: str,
        base_url: str = "https://api.flutterwave.com/v3",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def mode(self) -> str:
        return "live"

    def _headers(self) -> Dict[str, str]:
        if not self.secret_key:
            raise GatewayConfigurationError("Payment gateway is not configured.")
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport)

    async def charge(
        self,
        payload: Dict[str, Any],
        charge_type: PaymentMethod,
        *,
        default_failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> GatewayResult:
        url = f"{self.base_url}/charges"
        params = {"type": charge_type.value}
        headers = self._headers()

        logger.info(
            "Gateway charge request: url=%s?type=%s auth=Bearer %s...",
            url, charge_type.value, self.secret_key[:10],
        )
        logger.debug("Gateway charge payload: %s", redact_payload(payload))

        data = await self._send("POST", url, params=params, json=payload, headers=headers)
        result = normalize_charge_response(data, default_failure_message=default_failure_message)
        if result.success:
            logger.info("Gateway accepted %s charge tx_ref=%s id=%s", charge_type.value, result.tx_ref, result.transaction_id)
        else:
            logger.error("Gateway rejected %s charge: %s", charge_type.value, result.message)
        return result

    async def verify_transaction(self, transaction_id: str) -> GatewayResult:
        if not is_valid_transaction_id(transaction_id):
            raise IntegrationResponseError(
                "Transaction id must be numeric.", payload={"transaction_id": transaction_id}
            )
        url = f"{self.base_url}/transactions/{quote(str(transaction_id), safe='')}/verify"
        headers = self._headers()
        logger.info("Gateway verify request: id=%s", transaction_id)
        data = await self._send("GET", url, headers=headers)
        return normalize_verify_response(data)

    async def _send(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            async with self._client() as client:
                response = await client.request(method, url, **kwargs)
                logger.info("Gateway response: status=%s", response.status_code)
                response.raise_for_status()
                return response.json() if response.content else {}
        except httpx.TimeoutException as e:
            logger.error("Gateway request timed out after %ss: %s", self.timeout_seconds, e)
            raise GatewayTimeoutError() from e
        except httpx.HTTPStatusError as e:
            body = _safe_json(e.response)
            logger.error("HTTP error from gateway: %s %s", e.response.status_code, body)
            raise GatewayTransportError(error_message_from_body(body)) from e
        except httpx.RequestError as e:
            logger.error("Request error connecting to gateway: %s", e)
            raise GatewayTransportError() from e
        except ValueError as e:
            logger.error("Gateway returned a non-JSON body: %s", e)
            raise GatewayTransportError() from e


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
