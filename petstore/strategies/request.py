from dataclasses import dataclass
from typing import Optional

from petstore.exceptions import (
    UnsupportedPaymentException,
    UnsupportedPaymentTypeException,
    ValidationException,
)
from petstore.models.payment_model import PaymentType, WalletType


@dataclass
class PaymentRequest:
    """Body of ``POST /api/stores/order/<id>/pay``."""
    payment_type: PaymentType
    shipping_address_id: Optional[int] = None
    billing_address_id: Optional[int] = None
    card_number: Optional[str] = None
    wallet_type: Optional[WalletType] = None
    wallet_id: Optional[str] = None
    paypal_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data):
        if not data or not data.get('paymentType'):
            raise ValidationException('Payment type must not be null')
        try:
            payment_type = PaymentType(str(data['paymentType']).upper())
        except ValueError:
            raise UnsupportedPaymentTypeException(f"Payment type not supported: {data['paymentType']}")

        wallet_type = None
        if data.get('walletType'):
            try:
                wallet_type = WalletType(str(data['walletType']).upper())
            except ValueError:
                raise UnsupportedPaymentException(f"E-Wallet type not supported: {data['walletType']}")

        return cls(
            payment_type=payment_type,
            shipping_address_id=_optional_int(data, 'shippingAddressId'),
            billing_address_id=_optional_int(data, 'billingAddressId'),
            card_number=data.get('cardNumber'),
            wallet_type=wallet_type,
            wallet_id=data.get('walletId'),
            paypal_id=data.get('paypalId'),
        )


def _optional_int(data, key):
    value = data.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationException(f'{key} must be an integer')
