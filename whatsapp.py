"""
WhatsApp checkout: business hours and message composition.

There is no order system. Buying, contacting the shop and subscribing to the
newsletter all end in a wa.me deep link carrying a pre-filled message.
"""
from datetime import datetime
from urllib.parse import quote

from catalog import calculate_discount, format_price

WHATSAPP_NUMBER = "5581991103194"
WHATSAPP_URL = "https://wa.me/{number}?text={text}"

# ----------------------------
# BUSINESS HOURS
# ----------------------------
ONLINE_NOTICE = "Estamos online agora! 🟢"
OFFLINE_NOTICE = "Estamos fora do horário de atendimento, mas responderemos em breve! 🟡"

WEEKLY_SCHEDULE = (
    "Horário de Atendimento:\n"
    "📅 Segunda a Sexta: 8h às 18h\n"
    "📅 Sábado: 8h às 14h\n"
    "📅 Domingo: Fechado"
)
SCHEDULE_SUMMARY = "Seg-Sex: 8h-18h | Sáb: 8h-14h | Dom: Fechado"


def is_business_hours(now=None) -> bool:
    """Mon-Fri 8h-18h, Sat 8h-14h, closed on Sunday. Local time."""
    now = now or datetime.now()
    weekday, hour = now.weekday(), now.hour

    if weekday <= 4:
        return 8 <= hour < 18
    if weekday == 5:
        return 8 <= hour < 14
    return False


def business_hours_status(now=None) -> str:
    if is_business_hours(now):
        return "🟢 Atendimento Online - Resposta Imediata"
    return "🟡 Fora do Horário - Responderemos em Breve"


def hours_notice(now=None, with_schedule=True) -> str:
    """Opening line of every message. Closed hours may spell out the schedule."""
    if is_business_hours(now):
        return ONLINE_NOTICE
    if with_schedule:
        return f"{OFFLINE_NOTICE}\n\n{WEEKLY_SCHEDULE}\n\n"
    return OFFLINE_NOTICE


# ----------------------------
# MESSAGES
# ----------------------------
def price_clause(product) -> str:
    discount = calculate_discount(product.price, product.original_price)
    if discount:
        return (
            f" ({discount}% OFF - De {format_price(product.original_price)}"
            f" por {format_price(product.price)})"
        )
    return f" ({format_price(product.price)})"


def product_message(product, color=None, size=None, now=None) -> str:
    color_info = f"\n🎨 Cor: {color}" if color else ""
    size_info = f"\n📏 Tamanho: {size}" if size else ""
    return (
        f"{hours_notice(now)}\n\n"
        f"Olá! Tenho interesse na camiseta {product.name}{price_clause(product)}."
        f"{color_info}{size_info}\n\n"
        "Gostaria de mais informações sobre disponibilidade e formas de pagamento."
    )


def general_message(now=None) -> str:
    return f"{hours_notice(now)}\n\nOlá! Gostaria de conhecer mais sobre os produtos AKRON."


def contact_message(name, email, message, now=None) -> str:
    return (
        f"{hours_notice(now, with_schedule=False)}\n\n"
        "Contato via site AKRON:\n"
        f"Nome: {name}\n"
        f"Email: {email}\n"
        f"Mensagem: {message}"
    )


def newsletter_message(email, now=None) -> str:
    return (
        f"{hours_notice(now, with_schedule=False)}\n\n"
        "Newsletter AKRON - Novo cadastro:\n"
        f"Email: {email}"
    )


def whatsapp_link(text, number=WHATSAPP_NUMBER) -> str:
    # same escaping as JavaScript's encodeURIComponent
    return WHATSAPP_URL.format(number=number, text=quote(text, safe="!*'()"))
