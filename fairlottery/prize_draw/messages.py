"""Offline congratulation messages shown after a drawing."""

from __future__ import annotations

import random
import re
from typing import Optional

from ..models import Order

UNKNOWN_EXHIBITOR = "Dostawca"

_PLACEHOLDER = re.compile(r"\{(client|exhibitor)\}")

TEMPLATES = (
    "Gratulacje dla firmy {client}! Wasze zamówienie u wystawcy {exhibitor} przyniosło Wam szczęście!",
    "Mamy zwycięzcę! {client} wygrywa nagrodę dzięki współpracy z {exhibitor}!",
    "Fantastyczna wiadomość dla {client}! Bilet od {exhibitor} okazał się tym szczęśliwym!",
    "Wielkie brawa dla {client}! Dziękujemy za zaufanie okazane firmie {exhibitor}!",
    "To jest Wasz dzień! {client} wygrywa losowanie! Podziękowania dla stoiska {exhibitor}.",
    "Ależ emocje! Zwycięża {client}. Udana transakcja z {exhibitor} procentuje!",
    "Szczęście uśmiechnęło się do firmy {client}! Gratulujemy świetnego wyboru dostawcy: {exhibitor}!",
    "Brawa! {client} zgarnia nagrodę. Dziękujemy za zamówienie złożone u {exhibitor}.",
    "Zwycięstwo! {client} - ten dzień należy do Was! Partnerstwo z {exhibitor} to strzał w dziesiątkę.",
    "Mamy to! {client} wygrywa nagrodę główną. Gratulacje dla wystawcy {exhibitor} za skuteczność!",
    "Niesamowite szczęście firmy {client}! Zamówienie u {exhibitor} okazało się przepustką do nagrody.",
    "Halo Targi! Zwycięża {client}! Dziękujemy wystawcy {exhibitor} za udział w sukcesie.",
    "Co za niespodzianka! Firma {client} dołącza do grona zwycięzców dzięki {exhibitor}!",
    "Los uśmiechnął się do {client}. Dziękujemy za wizytę na stoisku {exhibitor}!",
    "Mamy werdykt! Nagroda wędruje do {client}. Brawo dla wystawcy {exhibitor}!",
    "Targowy sukces! {client} wygrywa w wielkim stylu. Transakcja z {exhibitor} się opłaciła.",
    "Idealny wybór! {client} postawił na {exhibitor} i wygrał nagrodę!",
    "To musi być dobry dzień dla {client}! Gratulujemy wygranej i współpracy z {exhibitor}.",
    "Znakomity strzał! {client} wygrywa. Pozdrawiamy ekipę ze stoiska {exhibitor}.",
    "Wielka wygrana dla {client}! Dziękujemy, że jesteście z nami i z firmą {exhibitor}.",
)


def congratulation_message(order: Order, rng: Optional[random.Random] = None) -> str:
    """Pick a template at random and fill in the client and exhibitor names."""
    template = (rng or random).choice(TEMPLATES)
    names = {
        "client": order.client_name,
        "exhibitor": order.created_by or UNKNOWN_EXHIBITOR,
    }
    # Single pass, so braces inside the names are never substituted again.
    return _PLACEHOLDER.sub(lambda match: names[match.group(1)], template)


__all__ = ["TEMPLATES", "congratulation_message"]
