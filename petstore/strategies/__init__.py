from petstore.strategies.factory import PaymentStrategyFactory, payment_strategy_factory
from petstore.strategies.request import PaymentRequest
