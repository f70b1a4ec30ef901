"""Email templates for new-order notifications.

Each template knows who it is addressed to and renders subject and HTML
body from the order context. The invoice itself travels as an attachment,
so the bodies stay short.
"""

from enum import Enum


class RecipientRole(Enum):
    OPERATOR = "Operator"
    CUSTOMER = "Customer"


class OperatorOrderTemplate:
    role = RecipientRole.OPERATOR.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "subject": f"New order #{order_id}",
            "html": "<p>Order details are in the attached PDF.</p>",
        }


class CustomerAcknowledgementTemplate:
    role = RecipientRole.CUSTOMER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        return {
            "subject": f"Your order #{order_id} has been received",
            "html": "<p>Thank you for your order! Order details are in the attached PDF.</p>",
        }


TEMPLATE_REGISTRY: dict[str, type] = {
    RecipientRole.OPERATOR.value: OperatorOrderTemplate,
    RecipientRole.CUSTOMER.value: CustomerAcknowledgementTemplate,
}


def get_template(role: str):
    """Look up a template class by recipient role string."""
    template_cls = TEMPLATE_REGISTRY.get(role)
    if template_cls is None:
        raise ValueError(f"No template registered for recipient role: {role}")
    return template_cls
