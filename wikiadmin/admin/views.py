from sqladmin import ModelView

from wikiadmin.config.models import Config
from wikiadmin.external_account.models import ExternalAccount
from wikiadmin.page.models import Page
from wikiadmin.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    icon = "fa-solid fa-user"

    column_list = [
        User.email,
        User.username,
        User.name,
        User.status,
        User.is_admin,
        User.id,
        User.external_id,
        User.created_at,
        User.updated_at,
    ]

    column_searchable_list = [
        User.email,
        User.username,
        User.name,
        User.external_id,
    ]

    column_sortable_list = [getattr(User, field) for field in User.model_fields]

    # Removal is a soft delete done through the API.
    can_delete = False


class PageAdmin(ModelView, model=Page):
    name = "Page"
    name_plural = "Pages"
    icon = "fa-solid fa-file-lines"

    column_list = [
        Page.path,
        Page.creator_id,
        Page.grant,
        Page.status,
        Page.created_at,
        Page.updated_at,
    ]
    column_searchable_list = [Page.path]
    column_sortable_list = [Page.path, Page.created_at, Page.updated_at]


class ExternalAccountAdmin(ModelView, model=ExternalAccount):
    name = "External Account"
    name_plural = "External Accounts"
    icon = "fa-solid fa-link"

    column_list = [
        ExternalAccount.provider_type,
        ExternalAccount.account_id,
        ExternalAccount.user_id,
        ExternalAccount.created_at,
    ]
    column_searchable_list = [ExternalAccount.account_id]
    column_sortable_list = [ExternalAccount.provider_type, ExternalAccount.created_at]
    can_create = False
    can_edit = False


class ConfigAdmin(ModelView, model=Config):
    name = "Config"
    name_plural = "Configs"
    icon = "fa-solid fa-gear"

    column_list = [Config.ns, Config.key, Config.value, Config.updated_at]
    column_searchable_list = [Config.key]
    column_sortable_list = [Config.ns, Config.key, Config.updated_at]


ADMIN_VIEWS = (UserAdmin, PageAdmin, ExternalAccountAdmin, ConfigAdmin)
