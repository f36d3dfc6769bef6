from django.db import models
from django.core.exceptions import ValidationError

from apps.core.models import BaseModel


class Entity(BaseModel):
    """
    A person or an organization the farm deals with
    """
    NATURE_CONTACT = 'contact'
    NATURE_ORGANIZATION = 'organization'

    NATURE_CHOICES = [
        (NATURE_CONTACT, 'Contact'),
        (NATURE_ORGANIZATION, 'Organization'),
    ]

    nature = models.CharField(max_length=20, choices=NATURE_CHOICES, default=NATURE_CONTACT, db_index=True)
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255)
    active = models.BooleanField(default=True)
    description = models.TextField(blank=True)

    class Meta:
        db_table = 'entities'
        verbose_name = 'Entity'
        verbose_name_plural = 'Entities'
        ordering = ['last_name', 'first_name']

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class EntityAddress(BaseModel):
    """
    A way to reach an entity: postal mail, email, phone...
    """
    CANAL_MAIL = 'mail'
    CANAL_EMAIL = 'email'
    CANAL_PHONE = 'phone'
    CANAL_MOBILE = 'mobile'
    CANAL_WEBSITE = 'website'

    CANAL_CHOICES = [
        (CANAL_MAIL, 'Mail'),
        (CANAL_EMAIL, 'Email'),
        (CANAL_PHONE, 'Phone'),
        (CANAL_MOBILE, 'Mobile'),
        (CANAL_WEBSITE, 'Website'),
    ]

    entity = models.ForeignKey(Entity, on_delete=models.CASCADE, related_name='addresses')
    canal = models.CharField(max_length=20, choices=CANAL_CHOICES, default=CANAL_MAIL)
    coordinate = models.CharField(max_length=500, blank=True)
    by_default = models.BooleanField(default=False)

    # Postal lines, only meaningful for mail addresses
    mail_line_1 = models.CharField(max_length=255, blank=True)
    mail_line_2 = models.CharField(max_length=255, blank=True)
    mail_line_3 = models.CharField(max_length=255, blank=True)
    mail_line_4 = models.CharField(max_length=255, blank=True)
    mail_line_5 = models.CharField(max_length=255, blank=True)
    mail_line_6 = models.CharField(max_length=255, blank=True)
    mail_country = models.CharField(max_length=2, blank=True)

    class Meta:
        db_table = 'entity_addresses'
        verbose_name = 'Entity Address'
        verbose_name_plural = 'Entity Addresses'
        ordering = ['-by_default', 'created_at']

    def __str__(self):
        return self.coordinate or self.mail_line_1

    @property
    def is_mail(self):
        return self.canal == self.CANAL_MAIL

    def mail_lines(self):
        lines = [
            self.mail_line_1, self.mail_line_2, self.mail_line_3,
            self.mail_line_4, self.mail_line_5, self.mail_line_6,
        ]
        return [line for line in lines if line]

    def clean(self):
        super().clean()
        if self.is_mail:
            if not self.mail_line_1 and self.entity_id:
                self.mail_line_1 = self.entity.full_name
            if not self.coordinate:
                self.coordinate = ', '.join(self.mail_lines())
        elif not self.coordinate:
            raise ValidationError({'coordinate': 'This field is required.'})
