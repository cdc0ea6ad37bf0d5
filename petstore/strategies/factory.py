from petstore.exceptions import UnsupportedPaymentTypeException
from petstore.strategies.payment import (
    CreditCardPaymentStrategy,
    DebitCardPaymentStrategy,
    EWalletPaymentStrategy,
    PayPalPaymentStrategy,
)


class PaymentStrategyFactory:
    """Factory Pattern - payment strategy per payment type"""

    def __init__(self, strategies=None):
        if strategies is None:
            strategies = [
                CreditCardPaymentStrategy(),
                DebitCardPaymentStrategy(),
                EWalletPaymentStrategy(),
                PayPalPaymentStrategy(),
            ]
        self.strategies = {strategy.payment_type: strategy for strategy in strategies}

    def get_strategy(self, payment_type):
        strategy = self.strategies.get(payment_type)
        if strategy is None:
            raise UnsupportedPaymentTypeException(f'Payment type not supported: {payment_type}')
        return strategy


payment_strategy_factory = PaymentStrategyFactory()
