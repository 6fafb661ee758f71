"""Utility functions for Wallact: addresses and unit conversion."""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

from eth_account import Account
from eth_typing import ChecksumAddress
from web3 import Web3

from .constants import ETHER_DECIMALS, WEI_PER_ETHER
from .exceptions import ConversionError, InvalidKeyError


def address_from_private_key(private_key: str) -> ChecksumAddress:
    """Return the checksummed address controlled by ``private_key``."""
    try:
        account = Account.from_key(private_key)
    except Exception as exc:
        raise InvalidKeyError(
            "Failed to derive account from private key", details={"error": str(exc)}
        ) from exc
    return account.address


def is_valid_address(address: Any) -> bool:
    """Return True for well-formed hex addresses (checksummed or single-case)."""
    if not isinstance(address, str):
        return False
    return Web3.is_address(address)


def to_smallest_unit(amount: int | float | str | Decimal) -> str:
    """Convert an ether-denominated amount into a wei integer string.

    At most 18 fractional digits are accepted; anything finer cannot be
    represented in wei and raises :class:`ConversionError`.
    """
    value = _parse_decimal(amount)

    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + ETHER_DECIMALS + 2
        if value.normalize().as_tuple().exponent < -ETHER_DECIMALS:
            raise ConversionError(
                f"Amount has more than {ETHER_DECIMALS} decimal places", amount=amount
            )
        wei = value.scaleb(ETHER_DECIMALS)

    return str(int(wei))


def from_smallest_unit(amount: int | str | Decimal) -> str:
    """Convert a wei amount into an ether decimal string such as ``"1.0"``."""
    wei = _parse_integer(amount)

    whole, fraction = divmod(abs(wei), WEI_PER_ETHER)
    fraction_digits = f"{fraction:0{ETHER_DECIMALS}d}".rstrip("0") or "0"
    sign = "-" if wei < 0 else ""
    return f"{sign}{whole}.{fraction_digits}"


def _parse_decimal(amount: Any) -> Decimal:
    if isinstance(amount, bool):
        raise ConversionError("Boolean is not a numeric amount", amount=amount)

    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int | float | str):
        text = str(amount).strip()
        if not text:
            raise ConversionError("Amount cannot be empty", amount=amount)
        try:
            value = Decimal(text)
        except InvalidOperation as exc:
            raise ConversionError(
                f"Invalid numeric amount: {amount!r}", amount=amount, details={"error": str(exc)}
            ) from exc
    else:
        raise ConversionError(
            f"Unsupported amount type: {type(amount).__name__}", amount=amount
        )

    if not value.is_finite():
        raise ConversionError("Amount must be finite", amount=amount)
    return value


def _parse_integer(amount: Any) -> int:
    if isinstance(amount, bool):
        raise ConversionError("Boolean is not a numeric amount", amount=amount)

    if isinstance(amount, int):
        return amount

    if isinstance(amount, Decimal) and amount.is_finite() and amount == amount.to_integral_value():
        return int(amount)

    if isinstance(amount, str):
        text = amount.strip()
        try:
            if text.lower().startswith(("0x", "-0x")):
                return int(text, 16)
            if text.lstrip("+-").isdigit():
                return int(text)
        except ValueError as exc:
            raise ConversionError(
                f"Invalid wei amount: {amount!r}", amount=amount, details={"error": str(exc)}
            ) from exc
        raise ConversionError(f"Invalid wei amount: {amount!r}", amount=amount)

    raise ConversionError(f"Unsupported amount type: {type(amount).__name__}", amount=amount)
