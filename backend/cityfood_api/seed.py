"""
Seed data for development and demos.
Creates categories, users, businesses with menus, carts and orders.

Idempotent: does nothing when categories already exist.
"""

from datetime import timedelta
import random

from sqlalchemy import select
from sqlalchemy.orm import Session

from cityfood_api.models import (
    Address,
    Business,
    Cart,
    CartItem,
    Category,
    MenuItem,
    MenuSection,
    Order,
    OrderItem,
    User,
)
from cityfood_api.models.base import utcnow
from shared.config.constants import OrderStatus
from shared.config.logging import get_logger
from shared.security.password import hash_password
from shared.utils.validators import slugify

logger = get_logger(__name__)


# =============================================================================
# Seed constants
# =============================================================================

DEFAULT_PASSWORD = "password123"
ADMIN_ACCOUNT_COUNT = 10
ADMIN_FLAGGED_COUNT = 3
CLIENT_ACCOUNT_COUNT = 20
ORDER_COUNT = 40
ORDER_HISTORY_DAYS = 30

FIRST_NAMES = [
    "Amadou", "Mariam", "Ousmane", "Fatoumata", "Modibo", "Aissata", "Seydou", "Kadidia",
    "Ibrahima", "Djeneba", "Boubacar", "Aminata", "Moussa", "Zara", "Abdoulaye", "Hawa",
    "Sidi", "Nana", "Alassane", "Kadiatou",
]
LAST_NAMES = [
    "Diallo", "Traoré", "Coulibaly", "Sow", "Konaté", "Diarra", "Cissé", "Touré",
    "Camara", "Doumbia", "Sidibé", "Keita", "Bah", "Sylla", "Dembélé", "Fofana",
    "Sanogo", "Kanté", "Diakité", "Maïga",
]
CITIES = ["Bamako", "Ségou", "Kayes", "Sikasso", "Mopti"]

# (category name, business prefix, count, description)
BUSINESS_PLAN = [
    ("Restaurant", "Restaurant", 5, "Spécialités culinaires maliennes et africaines"),
    ("Pharmacie", "Pharmacie", 3, "Pharmacie locale avec médicaments essentiels"),
    ("Boutique", "Boutique", 4, "Vêtements, artisanat et produits locaux"),
    ("Supérette", "Supérette", 2, "Épicerie de quartier"),
    ("Livraison", "Service", 2, "Livraison rapide à domicile"),
    ("Taxi", "Taxi", 2, "Transport urbain rapide"),
]

SECTION_NAMES = ["Entrée", "Plat Principal", "Dessert"]

# (name, description, price in FCFA)
DISHES = [
    ("Salade Malienne", "Délicieuse salade fraîche préparée avec amour", 500),
    ("Poulet Yassa", "Délicieux poulet mariné préparé avec amour", 2000),
    ("Riz au Gras", "Délicieux riz épicé préparé avec amour", 1500),
    ("Tô avec Sauce", "Délicieux tô traditionnel préparé avec amour", 1200),
    ("Beignets de Banane", "Délicieux beignets sucrés préparés avec amour", 300),
]


def _person_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def _phone(rng: random.Random) -> str:
    return f"+223{rng.randint(10000000, 99999999)}"


def seed(db: Session, *, random_seed: int = 223) -> dict[str, int]:
    """
    Insert demo data.

    Returns:
        Number of rows created per table (empty when already seeded).
    """
    if db.scalar(select(Category.id).limit(1)):
        logger.info("Database already seeded, skipping")
        return {}

    rng = random.Random(random_seed)
    # One hash for every demo account
    password = hash_password(DEFAULT_PASSWORD)

    categories = {}
    for category_name, _, _, _ in BUSINESS_PLAN:
        category = Category(name=category_name, slug=slugify(category_name))
        db.add(category)
        categories[category_name] = category

    users: list[User] = []
    for i in range(ADMIN_ACCOUNT_COUNT):
        users.append(User(
            email=f"admin{i + 1}@cityfood.ml",
            password=password,
            name=_person_name(rng),
            phone=_phone(rng),
            is_admin=i < ADMIN_FLAGGED_COUNT,
        ))
    for i in range(CLIENT_ACCOUNT_COUNT):
        users.append(User(
            email=f"client{i + 1}@cityfood.ml",
            password=password,
            name=_person_name(rng),
            phone=_phone(rng),
        ))
    db.add_all(users)
    admins = users[:ADMIN_FLAGGED_COUNT]

    addresses: list[Address] = []
    for user in users:
        address = Address(
            street=f"Rue {rng.randint(1, 99)} {_person_name(rng)}",
            city=rng.choice(CITIES),
            zip_code=str(rng.randint(1000, 9999)),
            country="Mali",
            user=user,
        )
        addresses.append(address)
    db.add_all(addresses)

    businesses: list[Business] = []
    for category_name, prefix, count, description in BUSINESS_PLAN:
        for i in range(count):
            name = f"{prefix} {_person_name(rng)} {i + 1}"
            business = Business(
                name=name,
                slug=slugify(name),
                description=description,
                category=categories[category_name],
                is_open=rng.random() > 0.2,
            )
            business.admins = [rng.choice(admins)]
            businesses.append(business)
    db.add_all(businesses)

    restaurants = [b for b in businesses if b.category is categories["Restaurant"]]
    section_count = 0
    items_by_business: dict[int, list[MenuItem]] = {}
    for restaurant in restaurants:
        menu = []
        for section_name in SECTION_NAMES:
            section = MenuSection(name=section_name, business=restaurant)
            section_count += 1
            for dish_name, dish_description, price in DISHES:
                item = MenuItem(
                    name=dish_name,
                    description=dish_description,
                    price=price,
                    type="plat",
                    is_available=rng.random() > 0.1,
                    menu_section=section,
                )
                menu.append(item)
            db.add(section)
        items_by_business[id(restaurant)] = menu
    all_items = [item for menu in items_by_business.values() for item in menu]

    carts = []
    for user in users[ADMIN_ACCOUNT_COUNT:ADMIN_ACCOUNT_COUNT + 5]:
        cart = Cart(user=user)
        for menu_item in rng.sample(all_items, rng.randint(1, 3)):
            cart.cart_items.append(CartItem(menu_item=menu_item, quantity=rng.randint(1, 3)))
        carts.append(cart)
    db.add_all(carts)
    # Order lines reference menu items by id
    db.flush()

    now = utcnow()
    orders = []
    for _ in range(ORDER_COUNT):
        customer_index = rng.randrange(len(users))
        customer = users[customer_index]
        restaurant = rng.choice(restaurants)
        lines = [
            OrderItem(menu_item_id=item.id, name=item.name, price=item.price, quantity=rng.randint(1, 3))
            for item in rng.sample(items_by_business[id(restaurant)], rng.randint(1, 3))
        ]
        orders.append(Order(
            user=customer,
            phone=customer.phone,
            address=addresses[customer_index],
            business=restaurant,
            total=sum(line.price * line.quantity for line in lines),
            status=rng.choice(OrderStatus.ALL),
            items=lines,
            created_at=now - timedelta(
                days=rng.randrange(ORDER_HISTORY_DAYS),
                minutes=rng.randrange(24 * 60),
            ),
        ))
    db.add_all(orders)

    db.commit()

    counts = {
        "categories": len(categories),
        "users": len(users),
        "addresses": len(addresses),
        "businesses": len(businesses),
        "menu_sections": section_count,
        "menu_items": len(all_items),
        "carts": len(carts),
        "orders": len(orders),
    }
    logger.info("Seed data inserted", **counts)
    return counts
