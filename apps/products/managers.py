from django.db.models import Q
from django.utils import timezone

from apps.core.managers import AuditManager, AuditQuerySet


class ProductMembershipQuerySet(AuditQuerySet):

    def at(self, viewed_at=None):
        """Memberships covering the given instant, open bounds included"""
        viewed_at = viewed_at or timezone.now()
        return self.filter(
            Q(started_at__isnull=True) | Q(started_at__lte=viewed_at),
            Q(stopped_at__isnull=True) | Q(stopped_at__gte=viewed_at),
        )

    def opened(self):
        return self.filter(stopped_at__isnull=True)


class ProductQuerySet(AuditQuerySet):

    def members_of(self, group, viewed_at=None):
        """Products belonging to ``group`` at ``viewed_at`` (now by default)"""
        from apps.products.models import ProductMembership

        member_ids = ProductMembership.objects.at(viewed_at).filter(group=group).values('member_id')
        return self.filter(pk__in=member_ids)


class ProductGroupQuerySet(ProductQuerySet):

    def groups_of(self, member, viewed_at=None):
        """Groups containing ``member`` at ``viewed_at`` (now by default)"""
        from apps.products.models import ProductMembership

        group_ids = ProductMembership.objects.at(viewed_at).filter(member=member).values('group_id')
        return self.filter(pk__in=group_ids)


ProductMembershipManager = AuditManager.from_queryset(ProductMembershipQuerySet)
ProductManager = AuditManager.from_queryset(ProductQuerySet)
ProductGroupManager = AuditManager.from_queryset(ProductGroupQuerySet)
