"""
Profile use cases - settings page (full name, account email)
"""
from app.application import queries as q
from app.application.mutations import MutationController, MutationValidationError, MutationResult, optional_text
from app.application.views import BaseView
from app.domain.profile import Profile


class ProfileValidationError(MutationValidationError):
    pass


class ProfileController(MutationController):
    """Профиль один на пользователя: запись по user_id, без id"""

    table = "profiles"
    validation_error = ProfileValidationError
    messages = {
        "update": ("Profile updated successfully", "Failed to update profile"),
    }

    def validate(self, fields, partial=False):
        return Profile.update(optional_text(fields.get("full_name")))

    def create(self, fields):
        # профиль создаётся при регистрации (app/auth.py register_user)
        self._reject("Profile is created with the account")

    def update(self, record_id, fields):
        return self.update_profile((fields or {}).get("full_name"))

    def delete(self, record_id):
        self._reject("Profile cannot be deleted")

    def update_profile(self, full_name) -> MutationResult:
        row = self._validated({"full_name": full_name}, partial=True)
        # UserScopedStore добавит фильтр user_id
        return self._write("update", lambda: self.ctx.store.update(self.table, row, []))


class SettingsView(BaseView):

    def queries(self):
        return [q.profile(self.ctx.user.id)]

    def render(self) -> dict:
        profile = self.one(q.profile(self.ctx.user.id))
        return {
            "email": self.ctx.user.email,
            "profile": profile,
            "full_name": (profile or {}).get("full_name") or "",
            "errors": self.errors(),
        }
