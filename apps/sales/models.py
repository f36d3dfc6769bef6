from decimal import Decimal

from django.db import models
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator

from apps.core.models import BaseModel, NumberedModel


class Sale(NumberedModel, BaseModel):
    """
    Sale to a client, delivered at one of its addresses
    """
    number_prefix = 'S'

    STATE_DRAFT = 'draft'
    STATE_ESTIMATE = 'estimate'
    STATE_ORDER = 'order'
    STATE_INVOICE = 'invoice'
    STATE_ABORTED = 'aborted'

    STATE_CHOICES = [
        (STATE_DRAFT, 'Draft'),
        (STATE_ESTIMATE, 'Estimate'),
        (STATE_ORDER, 'Order'),
        (STATE_INVOICE, 'Invoice'),
        (STATE_ABORTED, 'Aborted'),
    ]

    client = models.ForeignKey(
        'entities.Entity',
        on_delete=models.PROTECT,
        related_name='sales'
    )
    delivery_address = models.ForeignKey(
        'entities.EntityAddress',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='delivered_sales'
    )
    state = models.CharField(max_length=20, choices=STATE_CHOICES, default=STATE_DRAFT, db_index=True)
    invoiced_at = models.DateTimeField(null=True, blank=True)
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'sales'
        verbose_name = 'Sale'
        verbose_name_plural = 'Sales'
        ordering = ['-created_at']

    def __str__(self):
        return self.number

    def clean(self):
        super().clean()
        if self.delivery_address_id and self.client_id and self.delivery_address.entity_id != self.client_id:
            raise ValidationError({'delivery_address': 'Must be an address of the client.'})

    @property
    def amount(self):
        return sum((item.amount for item in self.items.all()), Decimal('0'))


class SaleItem(BaseModel):
    """
    One line of a sale
    """
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='items')
    product_nature = models.ForeignKey(
        'products.ProductNature',
        on_delete=models.PROTECT,
        related_name='sale_items'
    )
    quantity = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        default=Decimal('1'),
        validators=[MinValueValidator(Decimal('0'))]
    )
    unit_pretax_amount = models.DecimalField(max_digits=19, decimal_places=4, default=Decimal('0'))

    class Meta:
        db_table = 'sale_items'
        verbose_name = 'Sale Item'
        verbose_name_plural = 'Sale Items'
        ordering = ['created_at']

    def __str__(self):
        return f"{self.sale} - {self.product_nature}"

    @property
    def amount(self):
        return self.quantity * self.unit_pretax_amount

    def subscribe(self, **attributes):
        """
        Open the subscription sold by this line when its nature is subscribing
        """
        from apps.subscriptions.models import Subscription

        if not self.product_nature.subscribing:
            return None
        subscription = Subscription(sale_item=self, product_nature=self.product_nature, **attributes)
        if subscription.quantity is None:
            subscription.quantity = self.quantity
        subscription.save()
        return subscription
