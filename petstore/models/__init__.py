from petstore.models.user_model import User, UserRole, Role
from petstore.models.category_model import Category
from petstore.models.pet_model import Pet, PetStatus
from petstore.models.cart_model import Cart, CartItem
from petstore.models.address_model import Address
from petstore.models.discount_model import Discount
from petstore.models.order_model import Order, OrderItem, OrderStatus
from petstore.models.payment_model import Payment, PaymentStatus, PaymentType, WalletType
from petstore.models.delivery_model import Delivery, DeliveryStatus
from petstore.models.audit_model import AuditLog, AuditAction
