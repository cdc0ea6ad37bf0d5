from decimal import Decimal

import pytest

from petstore.exceptions import (
    InvalidPaymentException,
    UnsupportedPaymentException,
    UnsupportedPaymentTypeException,
    ValidationException,
)
from petstore.models import Payment, PaymentType, WalletType
from petstore.strategies import PaymentRequest, PaymentStrategyFactory, payment_strategy_factory
from petstore.strategies.ewallet import BoostPayStrategy, EWalletStrategyFactory, GrabPayStrategy
from petstore.strategies.payment import (
    CreditCardPaymentStrategy,
    EWalletPaymentStrategy,
    PayPalPaymentStrategy,
    mask_card_number,
)


def processed_note(request):
    strategy = payment_strategy_factory.get_strategy(request.payment_type)
    strategy.validate(request)
    payment = Payment(amount=Decimal('10.00'))
    strategy.process(payment, request)
    return payment.payment_note


def test_factory_dispatches_on_type():
    for payment_type in PaymentType:
        assert payment_strategy_factory.get_strategy(payment_type).payment_type == payment_type


def test_factory_without_strategy_raises():
    factory = PaymentStrategyFactory(strategies=[PayPalPaymentStrategy()])
    with pytest.raises(UnsupportedPaymentTypeException):
        factory.get_strategy(PaymentType.CREDIT_CARD)


def test_card_note_is_masked():
    request = PaymentRequest(PaymentType.CREDIT_CARD, card_number='4111-1111-1111-9876')
    assert processed_note(request) == 'Credit card **** 9876'
    assert mask_card_number('') == '****'


def test_card_number_required():
    with pytest.raises(InvalidPaymentException):
        CreditCardPaymentStrategy().validate(PaymentRequest(PaymentType.CREDIT_CARD))


def test_paypal_note():
    assert processed_note(PaymentRequest(PaymentType.PAYPAL, paypal_id='pp-1')) == 'PayPal ID: pp-1'


def test_ewallet_delegates_to_wallet_strategy():
    request = PaymentRequest(PaymentType.E_WALLET, wallet_type=WalletType.BOOSTPAY, wallet_id='B-9')
    assert processed_note(request) == 'BOOSTPAY - B-9'


def test_ewallet_requires_type_and_id():
    strategy = EWalletPaymentStrategy()
    with pytest.raises(InvalidPaymentException, match='E-Wallet type is required'):
        strategy.validate(PaymentRequest(PaymentType.E_WALLET, wallet_id='x'))
    with pytest.raises(InvalidPaymentException, match='Wallet Id is required'):
        strategy.validate(PaymentRequest(PaymentType.E_WALLET, wallet_type=WalletType.GRABPAY))


def test_wallet_factory_rejects_unknown_wallet():
    factory = EWalletStrategyFactory(strategies=[GrabPayStrategy()])
    assert isinstance(factory.get_strategy(WalletType.GRABPAY), GrabPayStrategy)
    with pytest.raises(UnsupportedPaymentException):
        factory.get_strategy(WalletType.BOOSTPAY)
    assert BoostPayStrategy.wallet_type == WalletType.BOOSTPAY


def test_request_from_dict():
    request = PaymentRequest.from_dict({
        'paymentType': 'e_wallet', 'walletType': 'grabpay', 'walletId': 'G1',
        'shippingAddressId': '3', 'billingAddressId': 4,
    })
    assert request.payment_type == PaymentType.E_WALLET
    assert request.wallet_type == WalletType.GRABPAY
    assert request.shipping_address_id == 3
    assert request.billing_address_id == 4


def test_request_from_dict_errors():
    with pytest.raises(ValidationException):
        PaymentRequest.from_dict({})
    with pytest.raises(UnsupportedPaymentTypeException):
        PaymentRequest.from_dict({'paymentType': 'CASH'})
    with pytest.raises(UnsupportedPaymentException):
        PaymentRequest.from_dict({'paymentType': 'E_WALLET', 'walletType': 'APPLEPAY'})
    with pytest.raises(ValidationException):
        PaymentRequest.from_dict({'paymentType': 'PAYPAL', 'shippingAddressId': 'home'})
