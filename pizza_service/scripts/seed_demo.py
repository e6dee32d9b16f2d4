import logging

from sqlalchemy.orm import Session

from pizza_service.db.init_db import init_db
from pizza_service.db.session import engine
from pizza_service.models.franchise import Franchise, Store
from pizza_service.models.menu import MenuItem
from pizza_service.models.user import Role, User, UserRole
from pizza_service.services.users import UserService

DEMO_MENU = [
    ("Veggie", "A garden of delight", "pizza1.png", 0.0038),
    ("Pepperoni", "Spicy treat", "pizza2.png", 0.0042),
    ("Margarita", "Essential classic", "pizza3.png", 0.0042),
    ("Crusty", "A dry mouthed favorite", "pizza4.png", 0.0028),
    ("Charred Leopard", "For those with a darker side", "pizza5.png", 0.0099),
]


def seed():
    init_db(engine)
    db = Session(engine)

    try:
        print("Checking for demo menu...")
        if db.query(MenuItem).count() == 0:
            for title, description, image, price in DEMO_MENU:
                db.add(MenuItem(title=title, description=description, image=image, price=price))
            db.commit()
            print(f"Added {len(DEMO_MENU)} pizzas.")
        else:
            print("Menu already exists.")

        franchisee = db.query(User).filter(User.email == "f@jwt.com").first()
        if not franchisee:
            print("Creating demo franchisee...")
            franchisee = UserService(db).add_user("pizza franchisee", "f@jwt.com", "franchisee")

        franchise = db.query(Franchise).filter(Franchise.name == "pizzaPocket").first()
        if not franchise:
            print("Creating demo franchise...")
            franchise = Franchise(name="pizzaPocket")
            db.add(franchise)
            db.flush()
            db.add(Store(franchise_id=franchise.id, name="SLC"))
            if not any(r.role == Role.FRANCHISEE.value and r.object_id == franchise.id for r in franchisee.roles):
                db.add(UserRole(user_id=franchisee.id, role=Role.FRANCHISEE.value, object_id=franchise.id))
            db.commit()
        else:
            print("Demo franchise already exists.")

        if not db.query(User).filter(User.email == "d@jwt.com").first():
            print("Creating demo diner...")
            UserService(db).add_user("pizza diner", "d@jwt.com", "diner")
    finally:
        db.close()

    print("Done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed()
