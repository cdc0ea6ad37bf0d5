import logging
from abc import ABC, abstractmethod

from petstore.exceptions import InvalidPaymentException, UnsupportedPaymentException
from petstore.models.payment_model import WalletType

logger = logging.getLogger(__name__)


class EWalletStrategy(ABC):
    """One e-wallet provider behind the E_WALLET payment type."""

    wallet_type: WalletType

    def validate(self, request):
        if not request.wallet_id:
            raise InvalidPaymentException('Wallet Id is required for E-Wallet payments.')

    @abstractmethod
    def process(self, payment, request):
        pass


class GrabPayStrategy(EWalletStrategy):
    wallet_type = WalletType.GRABPAY

    def process(self, payment, request):
        logger.info(f"Processing GrabPay payment: {payment.amount}")
        payment.payment_note = f'{WalletType.GRABPAY.value} - {request.wallet_id}'


class BoostPayStrategy(EWalletStrategy):
    wallet_type = WalletType.BOOSTPAY

    def process(self, payment, request):
        logger.info(f"Processing BoostPay payment: {payment.amount}")
        payment.payment_note = f'{WalletType.BOOSTPAY.value} - {request.wallet_id}'


class EWalletStrategyFactory:
    def __init__(self, strategies=None):
        strategies = strategies if strategies is not None else [GrabPayStrategy(), BoostPayStrategy()]
        self.strategies = {strategy.wallet_type: strategy for strategy in strategies}

    def get_strategy(self, wallet_type):
        strategy = self.strategies.get(wallet_type)
        if strategy is None:
            raise UnsupportedPaymentException(f'E-Wallet type not supported: {wallet_type}')
        return strategy
