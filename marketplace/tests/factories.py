import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from faker import Faker

from authentication.models import Seller, UserRole
from chat.models import Message
from marketplace.models import Order, Product

User = get_user_model()
fake = Faker()  # Instantiate Faker once


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    password = factory.django.Password("defaultpassword")
    is_active = True


class AdminFactory(UserFactory):
    is_staff = True
    username = factory.Sequence(lambda n: f"admin_{n}")
    email = factory.Sequence(lambda n: f"admin_{n}@example.com")


class SellerFactory(factory.django.DjangoModelFactory):
    """Approved shop with its owner and the shopkeeper role row."""

    class Meta:
        model = Seller

    user = factory.SubFactory(UserFactory)
    shop_name = factory.Sequence(lambda n: f"Shop {n}")
    business_type = "Individual"
    owner_name = factory.LazyFunction(fake.name)
    phone_number = "9876543210"
    address = "12 Market Road"
    city = "Pune"
    state = "Maharashtra"
    pincode = "411001"
    status = Seller.STATUS_APPROVED

    @factory.post_generation
    def role(obj, create, extracted, **kwargs):
        if create:
            UserRole.objects.get_or_create(user=obj.user, role="shopkeeper")


class PendingSellerFactory(SellerFactory):
    status = Seller.STATUS_PENDING


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    seller = factory.SubFactory(SellerFactory)
    title = factory.Sequence(lambda n: f"Product {n}")
    description = factory.LazyFunction(lambda: fake.paragraph(nb_sentences=2))
    price = Decimal("499.00")
    category = "Electronics"
    city = "Pune"
    state = "Maharashtra"
    phone_number = "9876543210"
    is_active = True


class OrderFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Order

    product = factory.SubFactory(ProductFactory)
    buyer = factory.SubFactory(UserFactory)
    seller = factory.SelfAttribute("product.seller")
    shop_name = factory.SelfAttribute("seller.shop_name")
    shop_address = factory.LazyAttribute(lambda o: o.seller.full_address)
    status = Order.STATUS_PENDING


class MessageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Message

    sender = factory.SubFactory(UserFactory)
    receiver = factory.SubFactory(UserFactory)
    product = factory.SubFactory(ProductFactory)
    content = factory.LazyFunction(lambda: fake.sentence())
    is_read = False
