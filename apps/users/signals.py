# apps/users/signals.py
from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import User


@receiver(pre_save, sender=User)
def user_pre_save(sender, instance, **kwargs):
    """Handle user pre-save actions"""
    if instance.email:
        instance.email = instance.email.strip().lower()
