"""Demo data: default users and a sample catalog."""

from dataclasses import dataclass, field

from retail_pos.config import get_logger
from retail_pos.core.entities.product import Product
from retail_pos.core.entities.user import User, UserRole
from retail_pos.core.interfaces.catalog_store import ICatalogStore
from retail_pos.core.interfaces.user_store import IUserStore

logger = get_logger(__name__)

DEFAULT_USERS = [
    ("admin", "Administrator", UserRole.ADMIN),
    ("staff", "Staff Member", UserRole.STAFF),
]

# (name, category, sale_price, stock_quantity)
SAMPLE_PRODUCTS = [
    ("Chicken Shawarma", "Shawarma", 8.99, 50),
    ("Beef Shawarma", "Shawarma", 9.99, 40),
    ("Mixed Shawarma", "Shawarma", 11.99, 30),
    ("Falafel Wrap", "Wraps", 6.99, 25),
    ("Hummus Plate", "Sides", 5.99, 20),
    ("Baba Ganoush", "Sides", 5.99, 15),
    ("French Fries", "Sides", 3.99, 100),
    ("Soft Drink", "Beverages", 2.49, 80),
    ("Bottled Water", "Beverages", 1.99, 60),
    ("Baklava", "Desserts", 4.99, 20),
]


@dataclass
class SeedResult:
    users_created: list[str] = field(default_factory=list)
    products_created: int = 0


async def seed_demo_data(
    user_store: IUserStore,
    catalog_store: ICatalogStore,
) -> SeedResult:
    """
    Insert default users and sample products when absent.

    Users are matched by username. Products are only inserted into an
    empty catalog, so running this twice is harmless.
    """
    result = SeedResult()

    for username, full_name, role in DEFAULT_USERS:
        if await user_store.get_by_username(username) is None:
            await user_store.create_user(
                User(username=username, full_name=full_name, role=role)
            )
            result.users_created.append(username)

    if not await catalog_store.list_products():
        for name, category, price, stock in SAMPLE_PRODUCTS:
            await catalog_store.create_product(
                Product(
                    name=name,
                    category=category,
                    sale_price=price,
                    stock_quantity=stock,
                )
            )
            result.products_created += 1

    logger.info(
        "demo_data_seeded",
        users=result.users_created,
        products=result.products_created,
    )
    return result
