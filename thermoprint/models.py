"""Printer models, command enumerations and the table of supported devices."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "Align",
    "BarcodeTextPosition",
    "BarcodeType",
    "PrinterType",
    "PrinterFont",
    "WriteMode",
    "printer_type_for_name",
    "printer_width",
]


class Align(IntEnum):
    """Text and barcode alignment (ESC a n)."""

    LEFT = 0x30
    CENTER = 0x31
    RIGHT = 0x32


class BarcodeTextPosition(IntEnum):
    """Where the human readable text of a 1D barcode is printed (GS H n)."""

    NONE = 0x30
    ABOVE = 0x31
    BELOW = 0x32
    BOTH = 0x33


class BarcodeType(IntEnum):
    """1D barcode symbologies (GS k m)."""

    UPCA = 0x00
    UPCE = 0x01
    EAN13 = 0x02
    EAN8 = 0x03
    CODE39 = 0x04
    ITF = 0x05
    CODABAR = 0x06
    CODE93 = 0x48
    CODE128 = 0x49
    GS1_128 = 0x50
    GS1_DATABAR_OMNI = 0x51
    GS1_DATABAR_TRUNCATED = 0x52
    GS1_DATABAR_LIMITED = 0x53
    GS1_DATABAR_EXPANDED = 0x54
    CODE128_AUTO = 0x55


class PrinterType(IntEnum):
    """Families of supported BLE thermal printers."""

    MTP2 = 0
    MTP3 = 1
    CAT = 2
    PERIPAGEPLUS = 3
    PERIPAGE = 4
    FOMEMO = 5

    @property
    def width(self) -> int:
        """Print head width in pixels."""
        return _WIDTHS[self]

    @property
    def service_uuid(self) -> str:
        """16-bit UUID of the printer's data service."""
        return _SERVICE_UUIDS[self]

    @property
    def characteristic_uuid(self) -> str:
        """16-bit UUID of the printer's data characteristic."""
        return _CHARACTERISTIC_UUIDS[self]

    @property
    def speaks_escpos(self) -> bool:
        """True for the families that accept ESC/POS style commands."""
        return self is not PrinterType.CAT

    @property
    def is_peripage(self) -> bool:
        """True for the PeriPage families, which need a command prefix."""
        return self in (PrinterType.PERIPAGE, PrinterType.PERIPAGEPLUS)


class PrinterFont(IntEnum):
    """Built-in printer text fonts selectable with ESC !."""

    FONT_12X24 = 0
    FONT_9X17 = 1


class WriteMode(IntEnum):
    """BLE write mode: whether each packet waits for an acknowledgement."""

    WITHOUT_RESPONSE = 0
    WITH_RESPONSE = 1


_WIDTHS = {
    PrinterType.MTP2: 384,
    PrinterType.MTP3: 576,
    PrinterType.CAT: 384,
    PrinterType.PERIPAGEPLUS: 576,
    PrinterType.PERIPAGE: 384,
    PrinterType.FOMEMO: 384,
}

_SERVICE_UUIDS = {
    PrinterType.MTP2: "18f0",
    PrinterType.MTP3: "18f0",
    PrinterType.CAT: "ae30",
    PrinterType.PERIPAGEPLUS: "ff00",
    PrinterType.PERIPAGE: "ff00",
    PrinterType.FOMEMO: "ff00",
}

_CHARACTERISTIC_UUIDS = {
    PrinterType.MTP2: "2af1",
    PrinterType.MTP3: "2af1",
    PrinterType.CAT: "ae01",
    PrinterType.PERIPAGEPLUS: "ff02",
    PrinterType.PERIPAGE: "ff02",
    PrinterType.FOMEMO: "ff02",
}

# Advertised BLE names of supported printers.
_KNOWN_NAMES: dict[str, PrinterType] = {
    "MP210": PrinterType.MTP2,
    "MP583": PrinterType.MTP2,
    "PT-210": PrinterType.MTP2,
    "MTP-2": PrinterType.MTP2,
    "MPT-II": PrinterType.MTP2,
    "MPT-3": PrinterType.MTP3,
    "MPT-3F": PrinterType.MTP3,
    "GT01": PrinterType.CAT,
    "GT02": PrinterType.CAT,
    "GB01": PrinterType.CAT,
    "GB02": PrinterType.CAT,
    "GB03": PrinterType.CAT,
    "YHK-A133": PrinterType.CAT,
    "PeriPage+": PrinterType.PERIPAGEPLUS,
    "PeriPage_": PrinterType.PERIPAGE,
    "T02": PrinterType.FOMEMO,
    "MX06": PrinterType.CAT,
    "MX10": PrinterType.CAT,
}

# PeriPage devices append part of their MAC address after the 9-character name.
_NAME_LIMIT = 9


def printer_type_for_name(name: str) -> PrinterType | None:
    """Return the printer family for an advertised BLE name, or None if unsupported."""
    return _KNOWN_NAMES.get(name[:_NAME_LIMIT])


def printer_width(printer_type: PrinterType | int) -> int:
    """Return the print width in pixels; raise ValueError for an unknown type."""
    return PrinterType(printer_type).width