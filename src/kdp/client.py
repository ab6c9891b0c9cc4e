"""KdpClient — async client for the KDP variant and product specification APIs.

Builds solver, saved-lookup, translate and product specification requests,
attaches the user key, Host and JWT headers, and validates responses. A
success body that does not parse raises KdpResponseValidationError. The
standard-configuration guard runs before any request is sent.

No retries and no caching: a failed call raises and the caller decides.
"""

import logging

import httpx
from pydantic import BaseModel, ValidationError

from src.config.settings import Settings
from src.kdp.errors import KdpRequestError, KdpResponseValidationError
from src.kdp.protocols import JsonWebTokenKey, TestObjectOrderLookup, TokenProvider
from src.models.common import VariantSpecificationType
from src.models.kdp import (
    KdpProductSpecification,
    KdpProductSpecificationRequest,
    KdpVariantSpecification,
    KdpVariantSpecificationRequest,
    KdpVariantSpecificationResponse,
)
from src.models.legacy import LegacyVariantSpecification
from src.models.order import TestObjectOrder
from src.models.variant_specification import VariantSpecificationVersion
from src.specification.errors import ArgumentInvalidError
from src.specification.translator import (
    decorate_immobilizer,
    decorate_type_code,
    ensure_standard_configuration,
    external_for_order,
    to_external,
)

logger = logging.getLogger(__name__)

_API_ROOT = "kdp/variantspecification/v100"
_PRODUCT_API_ROOT = "kdp/productspecification/v200"


class KdpClient:
    """Variant specification calls against KDP.

    Pass ``http_client`` to reuse a connection pool (or a mock transport);
    otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        token_provider: TokenProvider,
        order_lookup: TestObjectOrderLookup,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings.require_kdp_settings()
        self._settings = settings
        self._token_provider = token_provider
        self._order_lookup = order_lookup
        self._http_client = http_client

    # ------------------------------------------------------------------
    # Variant solver
    # ------------------------------------------------------------------

    async def get_variant_specification(
        self,
        test_object_order_id: str,
        spec_type: VariantSpecificationType = VariantSpecificationType.STANDARD,
    ) -> KdpVariantSpecification:
        """Solve a variant specification for an order from its own variant data."""
        order = await self._order_lookup.get_order_with_variants(test_object_order_id)
        request = KdpVariantSpecificationRequest.create(external_for_order(order))
        return await self._send("POST", f"variant/{spec_type.uri_path}", request, order)

    async def get_variant_specification_from_legacy(
        self,
        test_object_order_id: str,
        legacy_specifications: list[LegacyVariantSpecification],
        spec_type: VariantSpecificationType = VariantSpecificationType.STANDARD,
        structure_week: str | None = None,
    ) -> KdpVariantSpecification:
        """Solve a variant specification from explicit legacy records.

        ``structure_week`` defaults to the order's structure week.
        """
        order = await self._order_lookup.get_order_without_details(test_object_order_id)
        request = KdpVariantSpecificationRequest.create(
            external_for_order(order, legacy_specifications, structure_week),
        )
        return await self._send("POST", f"variant/{spec_type.uri_path}", request, order)

    # ------------------------------------------------------------------
    # Saved specifications
    # ------------------------------------------------------------------

    async def get_latest_saved_variant_specification(
        self,
        test_object_order_id: str,
        spec_type: VariantSpecificationType = VariantSpecificationType.STANDARD,
    ) -> KdpVariantSpecification:
        order = await self._order_lookup.get_order_without_details(test_object_order_id)
        request = KdpVariantSpecificationRequest.for_latest_saved(
            order.test_object_order_id, order.pno12,
        )
        return await self._send("GET", f"saved/{spec_type.uri_path}", request, order)

    async def get_latest_saved_variant_specification_or_default(
        self,
        test_object_order_id: str,
        spec_type: VariantSpecificationType = VariantSpecificationType.STANDARD,
    ) -> KdpVariantSpecification | None:
        """Like get_latest_saved_variant_specification, but None on failure."""
        try:
            return await self.get_latest_saved_variant_specification(
                test_object_order_id, spec_type,
            )
        except (
            KdpRequestError,
            KdpResponseValidationError,
            LookupError,
            httpx.HTTPError,
        ) as exc:
            logger.warning(
                "No saved %s variant specification for %s: %s",
                spec_type.friendly_name, test_object_order_id, exc,
            )
            return None

    # ------------------------------------------------------------------
    # Translation to downloadable
    # ------------------------------------------------------------------

    async def translate_to_downloadable(
        self,
        standard_specification: KdpVariantSpecification,
    ) -> KdpVariantSpecification:
        """Translate a standard-configuration specification to downloadable form.

        Raises:
            ArgumentInvalidError: If the specification is None.
            PreconditionFailedError: If it is not a standard configuration.
        """
        ensure_standard_configuration(standard_specification)
        request = KdpVariantSpecificationRequest.create(standard_specification)
        return await self._send("POST", "translate", request, None)

    async def translate_version_to_downloadable(
        self,
        version: VariantSpecificationVersion,
        order: TestObjectOrder | None = None,
    ) -> KdpVariantSpecification:
        """Translate a stored version and decorate the result.

        The type code comes from ``order`` and the immobilizer flag from the
        version's own specification.

        Raises:
            ArgumentInvalidError: If the version carries no specification.
            PreconditionFailedError: If it is not a standard configuration.
        """
        if version is None or version.variant_specification is None:
            msg = "Standard variant specification cannot be None."
            raise ArgumentInvalidError(msg, argument="version")

        standard_specification = ensure_standard_configuration(
            to_external(version.variant_specification),
        )
        request = KdpVariantSpecificationRequest.create(standard_specification)
        translated = await self._send("POST", "translate", request, order)

        translated = decorate_type_code(translated, order)
        return decorate_immobilizer(translated, version.variant_specification)

    # ------------------------------------------------------------------
    # Product specification
    # ------------------------------------------------------------------

    async def get_product_specification(
        self,
        product_number12: str,
        structure_week: str,
        exterior: str,
        interior: str,
        factory_code: str,
        maturity_state: bool,
        option_codes: list[str] | None = None,
    ) -> KdpProductSpecification:
        """Fetch the product specification for a PNO12 and its option codes.

        Vehicle data travels as query parameters and ``originatingSystem`` as
        a header. KDP's payload is returned as-is in a permissive model.

        Raises:
            ValueError: If the product specification user key is not set.
            KdpRequestError: On a non-success status.
            KdpResponseValidationError: If the body is not a JSON object.
        """
        self._settings.require_kdp_settings(product_specification=True)
        token = await self._token_provider.get_jwt_token(JsonWebTokenKey.KDP)
        request = httpx.Request(
            "POST",
            f"{self._settings.KDP_BASE_URL.rstrip('/')}/{_PRODUCT_API_ROOT}/",
            params={
                "productNumber12": product_number12,
                "structureWeek": structure_week,
                "colorCode": exterior,
                "upholsteryCode": interior,
                "plantCode": factory_code,
                "changeOrderStatusPrel": "1" if maturity_state else "0",
            },
            headers={
                "user-key": self._settings.KDP_PRODUCT_SPECIFICATION_USER_KEY,
                "originatingSystem": self._settings.KDP_ORIGINATING_SYSTEM,
                "Host": self._settings.KDP_HOST,
                "jwtToken": token,
            },
            json=_json_body(KdpProductSpecificationRequest.create(option_codes)),
        )
        response = await self._exchange(request, "productspecification")
        try:
            return KdpProductSpecification.model_validate_json(response.content)
        except ValidationError as exc:
            msg = "KDP product specification response is not a JSON object."
            raise KdpResponseValidationError(msg) from exc

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _build_request(self, method: str, path: str, payload: BaseModel) -> httpx.Request:
        token = await self._token_provider.get_jwt_token(JsonWebTokenKey.KDP)
        return httpx.Request(
            method,
            f"{self._settings.KDP_BASE_URL.rstrip('/')}/{_API_ROOT}/{path}",
            params={"originatingSystem": self._settings.KDP_ORIGINATING_SYSTEM},
            headers={
                "user-key": self._settings.KDP_VARIANT_SPECIFICATION_USER_KEY,
                "Host": self._settings.KDP_HOST,
                "jwtToken": token,
            },
            json=_json_body(payload),
        )

    async def _exchange(self, request: httpx.Request, label: str) -> httpx.Response:
        logger.info("KDP %s %s", request.method, label)

        if self._http_client is not None:
            response = await self._http_client.send(request)
        else:
            async with httpx.AsyncClient(timeout=self._settings.KDP_TIMEOUT_S) as client:
                response = await client.send(request)

        if not response.is_success:
            logger.warning("KDP %s %s failed with %d", request.method, label, response.status_code)
            raise KdpRequestError(status_code=response.status_code, body=response.text)
        return response

    async def _send(
        self,
        method: str,
        path: str,
        payload: BaseModel,
        order: TestObjectOrder | None,
    ) -> KdpVariantSpecification:
        request = await self._build_request(method, path, payload)
        response = await self._exchange(request, path)

        try:
            envelope = KdpVariantSpecificationResponse.model_validate_json(response.content)
        except ValidationError as exc:
            msg = f"KDP response for {path} is not a variant specification payload."
            raise KdpResponseValidationError(msg) from exc
        specification = envelope.validate_output()

        if specification.type_code is None and order is not None:
            specification = decorate_type_code(specification, order)
        return specification


def _json_body(payload: BaseModel) -> dict:
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
