from django.db import models
from django.db.models import F
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.core.models import BaseModel, NumberedModel
from apps.products.managers import ProductManager, ProductGroupManager, ProductMembershipManager


class ProductNature(BaseModel):
    """
    Kind of product, carrying the subscription terms of what it sells
    """
    name = models.CharField(max_length=255, unique=True)
    variety = models.CharField(max_length=120, default='product')
    active = models.BooleanField(default=True)

    # Subscription
    subscribing = models.BooleanField(
        default=False,
        help_text='Selling this nature opens a subscription'
    )
    subscription_nature = models.ForeignKey(
        'subscriptions.SubscriptionNature',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='product_natures'
    )
    subscription_period = models.CharField(
        max_length=255,
        blank=True,
        help_text='Delay expression such as "1 year" or "6 months"'
    )
    subscription_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text='Number of issues covered by one subscription'
    )

    class Meta:
        db_table = 'product_natures'
        verbose_name = 'Product Nature'
        verbose_name_plural = 'Product Natures'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        from apps.subscriptions.delays import compute_delay

        super().clean()
        if self.subscribing and not self.subscription_nature_id:
            raise ValidationError({'subscription_nature': 'Required for subscribing natures.'})
        if self.subscription_period:
            try:
                compute_delay(self.subscription_period, timezone.localdate())
            except ValueError as exc:
                raise ValidationError({'subscription_period': str(exc)})


class Product(NumberedModel, BaseModel):
    """
    Anything the farm tracks: animals, plants, land parcels, equipment...
    """
    number_prefix = 'P'

    name = models.CharField(max_length=255)
    variety = models.CharField(max_length=120, default='product')
    nature = models.ForeignKey(
        ProductNature,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='products'
    )
    work_number = models.CharField(max_length=255, blank=True)
    identification_number = models.CharField(max_length=255, blank=True)
    born_at = models.DateTimeField(null=True, blank=True)
    dead_at = models.DateTimeField(null=True, blank=True)
    description = models.TextField(blank=True)

    objects = ProductManager()

    class Meta:
        db_table = 'products'
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['name']

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        if self.born_at and self.dead_at and self.dead_at < self.born_at:
            raise ValidationError({'dead_at': 'Cannot die before being born.'})

    def groups_at(self, viewed_at=None):
        """Groups this product belongs to at a given time (now by default)"""
        return ProductGroup.objects.groups_of(self, viewed_at)


class ProductGroup(Product):
    """
    A product gathering other products (herd, batch, set of parcels...)
    """
    VARIETY_CHOICES = [
        ('product_group', 'Product group'),
        ('animal_group', 'Animal group'),
        ('plant_group', 'Plant group'),
        ('land_parcel_group', 'Land parcel group'),
        ('equipment_group', 'Equipment group'),
    ]

    parent = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='children'
    )

    objects = ProductGroupManager()

    class Meta:
        db_table = 'product_groups'
        verbose_name = 'Product Group'
        verbose_name_plural = 'Product Groups'
        ordering = ['name']

    def clean(self):
        if not self.variety or self.variety == 'product':
            self.variety = 'product_group'
        super().clean()
        if self.variety not in dict(self.VARIETY_CHOICES):
            raise ValidationError({'variety': f'"{self.variety}" is not a group variety.'})
        if self.name and ProductGroup.objects.filter(name=self.name).exclude(pk=self.pk).exists():
            raise ValidationError({'name': 'A group with this name already exists.'})
        if self.parent_id and self.parent_id == self.pk:
            raise ValidationError({'parent': 'A group cannot be its own parent.'})

    def add(self, member, started_at=None):
        """Add a member to the group from ``started_at`` (now by default)"""
        if not isinstance(member, Product):
            raise TypeError(f"Product expected, got {type(member).__name__}:{member!r}")
        membership = ProductMembership(
            group=self,
            member=member,
            started_at=started_at or timezone.now()
        )
        membership.save()
        return membership

    def remove(self, member, stopped_at=None):
        """
        Close the membership of ``member`` at ``stopped_at`` (now by default)

        The earliest membership still open at that time is closed. Without
        one, an exit-only membership is recorded.
        """
        if not isinstance(member, Product):
            raise TypeError(f"Product expected, got {type(member).__name__}:{member!r}")
        stopped_at = stopped_at or timezone.now()
        membership = (
            self.memberships.opened()
            .filter(member=member)
            .filter(models.Q(started_at__isnull=True) | models.Q(started_at__lte=stopped_at))
            .order_by(F('started_at').asc(nulls_first=True))
            .first()
        )
        if membership is None:
            membership = ProductMembership(group=self, member=member)
        membership.stopped_at = stopped_at
        membership.save()
        return membership

    def members_at(self, viewed_at=None):
        """Members of the group at a given time (now by default)"""
        return Product.objects.members_of(self, viewed_at or timezone.now())


class ProductMembership(BaseModel):
    """
    Time-bounded presence of a product in a group, bounds are optional
    """
    member = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='group_memberships'
    )
    group = models.ForeignKey(
        ProductGroup,
        on_delete=models.CASCADE,
        related_name='memberships'
    )
    started_at = models.DateTimeField(null=True, blank=True, db_index=True)
    stopped_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = ProductMembershipManager()

    class Meta:
        db_table = 'product_memberships'
        verbose_name = 'Product Membership'
        verbose_name_plural = 'Product Memberships'
        ordering = ['started_at']
        indexes = [
            models.Index(fields=['group', 'member'], name='product_membership_group_idx'),
        ]

    def __str__(self):
        return f"{self.member} in {self.group}"

    def clean(self):
        super().clean()
        if self.started_at and self.stopped_at and self.stopped_at < self.started_at:
            raise ValidationError({'stopped_at': 'Must be after the start of the membership.'})
        if self.member_id and self.group_id and self.member_id == self.group_id:
            raise ValidationError({'member': 'A group cannot be a member of itself.'})
