# ==============================================================================
# Tally ERP Inventory Service
# ==============================================================================
"""
InventoryService implementation for Tally ERP's XML-over-HTTP interface.

Two requests are used:
- Export "Stock Summary" to read closing quantities per stock item
- Import "Stock Item" to set the closing balance of one item

Transient connection errors and timeouts are retried (3 attempts, ~7
seconds). Every other failure, and the last failed attempt, is raised as
InventorySyncError.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional

import requests

from storefront.base.inventory import InventoryService
from storefront.core.exceptions import InventorySyncError
from storefront.utils.config import InventorySettings, get_settings
from storefront.utils.retry import HTTP_RETRY_EXCEPTIONS, retry_light

logger = logging.getLogger(__name__)

# Leading number of a Tally quantity such as "1,250 nos" or "-3.00 pcs"
_QUANTITY_RE = re.compile(r"-?\d[\d,]*(?:\.\d+)?")


class TallyInventoryService(InventoryService):
    """Inventory service talking to a Tally ERP server."""

    def __init__(
        self,
        settings: Optional[InventorySettings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the Tally client.

        Args:
            settings: Tally connection settings. Defaults to global settings.
            session: Optional requests session (shared connection pool).
        """
        self._settings = settings or get_settings().inventory
        self._session = session or requests.Session()

    # ==========================================================================
    # InventoryService
    # ==========================================================================

    def get_stock(self) -> dict[str, int]:
        """
        Read closing stock for every stock item.

        Returns:
            Dict mapping stock item name to closing quantity
        """
        logger.info("Fetching stock summary from Tally at %s", self._settings.url)
        root = self._request(self._export_envelope())
        stock = parse_stock_summary(root)
        logger.info("Fetched stock for %d items from Tally", len(stock))
        return stock

    def update_stock(self, product_name: str, quantity: int) -> bool:
        """
        Set the closing balance of one stock item.

        Returns:
            True if Tally reported no import errors
        """
        logger.info("Updating stock for %s to %d in Tally", product_name, quantity)
        root = self._request(self._import_envelope(product_name, quantity))
        ok = import_succeeded(root)
        if not ok:
            logger.warning("Tally rejected stock update for %s", product_name)
        return ok

    def close(self) -> None:
        self._session.close()

    # ==========================================================================
    # Requests
    # ==========================================================================

    def _request(self, envelope: ET.Element) -> ET.Element:
        try:
            body = self._post(ET.tostring(envelope, encoding="utf-8"))
        except requests.exceptions.RequestException as e:
            raise InventorySyncError(f"Tally request failed: {e}") from e

        try:
            return ET.fromstring(body)
        except ET.ParseError as e:
            raise InventorySyncError(f"Invalid XML from Tally: {e}") from e

    @retry_light(HTTP_RETRY_EXCEPTIONS, logger)
    def _post(self, payload: bytes) -> bytes:
        response = self._session.post(
            self._settings.url,
            data=payload,
            headers={"Content-Type": "text/xml; charset=utf-8"},
            timeout=self._settings.timeout_seconds,
        )
        response.raise_for_status()
        return response.content

    def _header(self, envelope: ET.Element, request: str, request_id: str) -> None:
        header = ET.SubElement(envelope, "HEADER")
        ET.SubElement(header, "VERSION").text = "1"
        ET.SubElement(header, "TALLYREQUEST").text = request
        ET.SubElement(header, "TYPE").text = "Data"
        ET.SubElement(header, "ID").text = request_id

    def _static_variables(self, desc: ET.Element) -> ET.Element:
        variables = ET.SubElement(desc, "STATICVARIABLES")
        if self._settings.company_name:
            ET.SubElement(variables, "SVCURRENTCOMPANY").text = self._settings.company_name
        return variables

    def _export_envelope(self) -> ET.Element:
        envelope = ET.Element("ENVELOPE")
        self._header(envelope, "Export", "Stock Summary")
        desc = ET.SubElement(ET.SubElement(envelope, "BODY"), "DESC")
        variables = self._static_variables(desc)
        ET.SubElement(variables, "SVEXPORTFORMAT").text = "$$SysName:XML"
        return envelope

    def _import_envelope(self, product_name: str, quantity: int) -> ET.Element:
        envelope = ET.Element("ENVELOPE")
        self._header(envelope, "Import", "Stock Item")
        body = ET.SubElement(envelope, "BODY")
        self._static_variables(ET.SubElement(body, "DESC"))
        message = ET.SubElement(ET.SubElement(body, "DATA"), "TALLYMESSAGE")
        item = ET.SubElement(message, "STOCKITEM", NAME=product_name)
        ET.SubElement(item, "CLOSINGBALANCE").text = str(quantity)
        return envelope


# ==============================================================================
# Response Parsing
# ==============================================================================


def parse_quantity(text: Optional[str]) -> int:
    """Parse a Tally quantity string like ``"1,250 nos"``; blank means 0."""
    if not text:
        return 0
    match = _QUANTITY_RE.search(text)
    if match is None:
        return 0
    return int(float(match.group(0).replace(",", "")))


def parse_stock_summary(root: ET.Element) -> dict[str, int]:
    """
    Extract item quantities from a Stock Summary export.

    The export lists ``DSPACCNAME`` (item name) and ``DSPSTKINFO`` (closing
    balance) as consecutive siblings.
    """
    stock: dict[str, int] = {}
    name = None
    for element in root:
        if element.tag == "DSPACCNAME":
            name = (element.findtext("DSPDISPNAME") or "").strip() or None
        elif element.tag == "DSPSTKINFO" and name is not None:
            stock[name] = parse_quantity(element.findtext("DSPSTKCL/DSPCLQTY"))
            name = None
    return stock


def import_succeeded(root: ET.Element) -> bool:
    """True if an import response reports no errors."""
    if root.findall(".//LINEERROR"):
        return False
    errors = root.findtext(".//ERRORS")
    return not errors or parse_quantity(errors) == 0
