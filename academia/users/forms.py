from django.contrib.auth import forms as admin_forms
from django.utils.translation import gettext_lazy as _

from .models import User


class UserAdminChangeForm(admin_forms.UserChangeForm):
    class Meta(admin_forms.UserChangeForm.Meta):  # type: ignore[name-defined]
        model = User
        field_classes = {"email": admin_forms.UsernameField}


class UserAdminCreationForm(admin_forms.UserCreationForm):
    """
    Form for User creation in the admin area, keyed by email.
    """

    class Meta(admin_forms.UserCreationForm.Meta):  # type: ignore[name-defined]
        model = User
        fields = ("email", "first_name", "role", "department")
        field_classes = {"email": admin_forms.UsernameField}
        error_messages = {
            "email": {"unique": _("This email has already been taken.")},
        }
