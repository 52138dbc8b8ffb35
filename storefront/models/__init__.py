"""Application models package."""

from storefront.models.audit_log import AuditLog
from storefront.models.bank_account import BankAccount
from storefront.models.catalog import Category, Product
from storefront.models.cms import MediaItem, NavigationItem, SiteContent, SiteSetting
from storefront.models.delivery import DeliverySetting, NonDeliveryDay
from storefront.models.order import Order, OrderItem
from storefront.models.review import Review
from storefront.models.user import User

__all__ = [
    "User", "Category", "Product", "Order", "OrderItem", "BankAccount", "DeliverySetting", "NonDeliveryDay",
    "NavigationItem", "SiteContent", "SiteSetting", "MediaItem", "Review", "AuditLog",
]
