"""Payment strategies.

Every strategy is asked to ``validate`` the request before any state changes,
then to ``process`` the already-built Payment, which only stamps the note.
"""
import logging
from abc import ABC, abstractmethod

from petstore.exceptions import InvalidPaymentException
from petstore.models.payment_model import PaymentType
from petstore.strategies.ewallet import EWalletStrategyFactory

logger = logging.getLogger(__name__)


def mask_card_number(card_number):
    digits = ''.join(ch for ch in card_number if ch.isdigit())
    return f'**** {digits[-4:]}' if digits else '****'


class PaymentStrategy(ABC):
    """Strategy interface"""

    payment_type: PaymentType

    @abstractmethod
    def validate(self, request):
        pass

    @abstractmethod
    def process(self, payment, request):
        pass


class CreditCardPaymentStrategy(PaymentStrategy):
    payment_type = PaymentType.CREDIT_CARD

    def validate(self, request):
        logger.info("Validating credit card payment details")
        if not request.card_number:
            raise InvalidPaymentException('Card number is required for credit card payments.')

    def process(self, payment, request):
        logger.info(f"Processing credit card payment for amount: {payment.amount}")
        payment.payment_note = f'Credit card {mask_card_number(request.card_number)}'


class DebitCardPaymentStrategy(PaymentStrategy):
    payment_type = PaymentType.DEBIT_CARD

    def validate(self, request):
        logger.info("Validating debit card payment details")
        if not request.card_number:
            raise InvalidPaymentException('Card number is required for debit card payments.')

    def process(self, payment, request):
        logger.info(f"Processing debit card payment for amount: {payment.amount}")
        payment.payment_note = f'Debit card {mask_card_number(request.card_number)}'


class EWalletPaymentStrategy(PaymentStrategy):
    payment_type = PaymentType.E_WALLET

    def __init__(self, wallet_factory=None):
        self.wallet_factory = wallet_factory or EWalletStrategyFactory()

    def validate(self, request):
        logger.info(f"Validating e-wallet payment details for wallet type: {request.wallet_type}")
        if request.wallet_type is None:
            raise InvalidPaymentException('E-Wallet type is required')
        self.wallet_factory.get_strategy(request.wallet_type).validate(request)

    def process(self, payment, request):
        logger.info(f"Processing e-wallet payment for amount: {payment.amount}")
        self.wallet_factory.get_strategy(request.wallet_type).process(payment, request)


class PayPalPaymentStrategy(PaymentStrategy):
    payment_type = PaymentType.PAYPAL

    def validate(self, request):
        logger.info("Validating PayPal payment details")
        if not request.paypal_id:
            raise InvalidPaymentException('PayPal ID is required')

    def process(self, payment, request):
        logger.info(f"Processing PayPal payment for amount: {payment.amount}")
        payment.payment_note = f'PayPal ID: {request.paypal_id}'
