import random

from fairlottery.app import FairLottery
from fairlottery.auth import UserSession
from fairlottery.config import configure_logging
from fairlottery.db.engine import make_engine
from fairlottery.models import Base


def main() -> None:
    """Reset the development store and seed it with sample data."""
    configure_logging()
    engine = make_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)

    app = FairLottery.from_settings(rng=random.Random(2024))

    # Exhibitors
    bricks = app.accounts.add("Cegielnia Nowak")
    tools = app.accounts.add("Narzędzia Kowalski")

    # Orders, one admin-entered without attribution
    app.ledger.append("Firma Budowlana XYZ", 12500, UserSession.exhibitor(bricks))
    app.ledger.append("Dom i Ogród Sp. z o.o.", "3450,00", UserSession.exhibitor(bricks))
    app.ledger.append("Hurtownia ABC", 780.5, UserSession.exhibitor(tools))
    app.ledger.append("Klient Targowy", 99.99)

    for account in app.accounts.list():
        print(f"{account.name}: access code {account.access_code}")
    for order in app.ledger.list():
        print(f"{order.ticket_number} {order.client_name} {order.order_value:.2f}")


if __name__ == "__main__":
    main()
