from django.db import models
from django.core.exceptions import ValidationError
from django.utils import formats, timezone

from apps.core.models import BaseModel, NumberedModel
from apps.subscriptions.delays import compute_delay

DEFAULT_PERIOD = '1 year'
DEFAULT_QUANTITY = 1


class SubscriptionNature(BaseModel):
    """
    Subscription scheme: a calendar period, or a range of numbered issues
    """
    NATURE_PERIOD = 'period'
    NATURE_QUANTITY = 'quantity'

    NATURE_CHOICES = [
        (NATURE_PERIOD, 'Period'),
        (NATURE_QUANTITY, 'Quantity'),
    ]

    name = models.CharField(max_length=255, unique=True)
    nature = models.CharField(max_length=20, choices=NATURE_CHOICES, default=NATURE_PERIOD)
    actual_number = models.IntegerField(
        default=0,
        help_text='Number of the current issue, for quantity natures'
    )
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'subscription_natures'
        verbose_name = 'Subscription Nature'
        verbose_name_plural = 'Subscription Natures'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def is_period(self):
        return self.nature == self.NATURE_PERIOD

    @property
    def is_quantity(self):
        return self.nature == self.NATURE_QUANTITY


class Subscription(NumberedModel, BaseModel):
    """
    Entitlement of a subscriber, either between two dates or between two
    issue numbers depending on its nature
    """
    number_prefix = 'SUB'

    nature = models.ForeignKey(
        SubscriptionNature,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    subscriber = models.ForeignKey(
        'entities.Entity',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    address = models.ForeignKey(
        'entities.EntityAddress',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    product_nature = models.ForeignKey(
        'products.ProductNature',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    sale = models.ForeignKey(
        'sales.Sale',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    sale_item = models.ForeignKey(
        'sales.SaleItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='subscriptions'
    )
    started_on = models.DateField(null=True, blank=True)
    stopped_on = models.DateField(null=True, blank=True)
    first_number = models.IntegerField(null=True, blank=True)
    last_number = models.IntegerField(null=True, blank=True)
    quantity = models.DecimalField(max_digits=19, decimal_places=4, null=True, blank=True)
    suspended = models.BooleanField(default=False)
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'subscriptions'
        verbose_name = 'Subscription'
        verbose_name_plural = 'Subscriptions'
        ordering = ['-created_at']

    def __str__(self):
        return self.number

    # ------------------------------------------------------------------
    # Derived attributes
    # ------------------------------------------------------------------

    def prepare(self):
        """
        Fill attributes deduced from the sale, the address and the product
        nature, then the default period or range of a new subscription
        """
        if self.sale_item_id:
            self.sale_id = self.sale_item.sale_id
        if self.sale_id and not self.address_id:
            self.address_id = self.sale.delivery_address_id
        if self.address_id:
            self.subscriber_id = self.address.entity_id
        if self.product_nature_id and self.product_nature.subscription_nature_id:
            self.nature_id = self.product_nature.subscription_nature_id

        if self._state.adding and self.nature_id:
            if self.nature.is_period:
                period = DEFAULT_PERIOD
                if self.product_nature_id and self.product_nature.subscription_period:
                    period = self.product_nature.subscription_period
                if self.started_on is None:
                    self.started_on = timezone.localdate()
                if self.stopped_on is None:
                    self.stopped_on = compute_delay(f"{period}, 1 day ago", self.started_on)
            elif self.nature.is_quantity:
                quantity = DEFAULT_QUANTITY
                if self.product_nature_id and self.product_nature.subscription_quantity:
                    quantity = self.product_nature.subscription_quantity
                if self.first_number is None:
                    self.first_number = self.nature.actual_number
                if self.last_number is None:
                    self.last_number = self.first_number + quantity - 1

    def compute_period(self):
        """Fill the nature and, for a new subscription, its default bounds"""
        if self.product_nature_id and not self.nature_id:
            self.nature_id = self.product_nature.subscription_nature_id
        if self._state.adding:
            self.prepare()
        return self

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def full_clean(self, *args, **kwargs):
        self.prepare()
        super().full_clean(*args, **kwargs)

    def clean(self):
        super().clean()
        errors = {}

        if not self.nature_id:
            errors['nature'] = 'This field is required.'
        if not self.subscriber_id:
            errors['subscriber'] = 'This field is required.'

        if self.nature_id and self.nature.is_period:
            if self.started_on is None:
                errors['started_on'] = 'This field is required.'
            if self.stopped_on is None:
                errors['stopped_on'] = 'This field is required.'
            if self.started_on and self.stopped_on and self.stopped_on < self.started_on:
                errors['stopped_on'] = 'Must be on or after the start date.'
        elif self.nature_id and self.nature.is_quantity:
            if self.first_number is None:
                errors['first_number'] = 'This field is required.'
            if self.last_number is None:
                errors['last_number'] = 'This field is required.'
            if (self.first_number is not None and self.last_number is not None
                    and self.last_number < self.first_number):
                errors['last_number'] = 'Must be greater than or equal to the first number.'

        if self._state.adding and self.sale_id and not self.sale_item_id:
            errors['sale_item'] = 'Required when the subscription comes from a sale.'

        if self.address_id:
            if self.subscriber_id and self.address.entity_id != self.subscriber_id:
                errors['subscriber'] = 'Must be the entity of the address.'
            if not self.address.is_mail:
                errors['address'] = 'Must be a mail address.'

        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Display and state
    # ------------------------------------------------------------------

    @property
    def subscriber_name(self):
        if self.address_id:
            return self.address.mail_line_1
        return str(self.subscriber) if self.subscriber_id else ''

    @property
    def start(self):
        if self.nature.is_quantity:
            return self.first_number
        if self.nature.is_period:
            return '' if self.started_on is None else formats.localize(self.started_on)
        return None

    @property
    def finish(self):
        if self.nature.is_quantity:
            return self.last_number
        if self.nature.is_period:
            return '' if self.stopped_on is None else formats.localize(self.stopped_on)
        return None

    def is_active(self, instant=None):
        """
        Whether the subscription covers ``instant``: an issue number for
        quantity natures (current issue by default), a date for period
        natures (today by default)
        """
        if self.nature.is_quantity:
            if instant is None:
                instant = self.nature.actual_number
            return self.first_number <= instant <= self.last_number
        if self.nature.is_period:
            if instant is None:
                instant = timezone.localdate()
            return self.started_on <= instant <= self.stopped_on
        return False
