"""
Panel user model
"""
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models
from django.utils.timezone import now


class PanelUserManager(BaseUserManager):
    """Manager creating users keyed by email."""

    def create_user(self, email, password=None, name='', role='user', **extra_fields):
        if not email:
            raise ValueError('Users must have an email address')
        user = self.model(
            email=self.normalize_email(email),
            name=name,
            role=role,
            **extra_fields
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, name='', **extra_fields):
        return self.create_user(email, password=password, name=name, role=PanelUser.ROLE_ADMIN, **extra_fields)


class PanelUser(AbstractBaseUser):
    """
    A person who can sign in to the control panel.
    The role decides whether the admin console mutations are allowed.
    """
    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Admin'),
        (ROLE_USER, 'User'),
    ]

    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_USER)

    is_active = models.BooleanField(default=True)
    date_joined = models.DateTimeField(default=now)

    objects = PanelUserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'panel_users'
        ordering = ['id']

    def __str__(self):
        return f"{self.email} ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    # Django admin site access follows the panel role
    @property
    def is_staff(self):
        return self.is_active and self.is_admin

    def has_perm(self, perm, obj=None):
        return self.is_staff

    def has_module_perms(self, app_label):
        return self.is_staff
