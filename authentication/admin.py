from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import CustomUser, LoginEvent, Profile, Seller, UserRole


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    fields = ("full_name", "phone_number", "avatar_url", "bio")


class UserRoleInline(admin.TabularInline):
    model = UserRole
    extra = 0
    fields = ("role", "created_at")
    readonly_fields = ("created_at",)


@admin.register(CustomUser)
class CustomUserAdmin(UserAdmin):
    list_display = ("email", "username", "is_active", "is_staff", "date_joined")
    search_fields = ("email", "username", "profile__full_name")
    ordering = ("-date_joined",)
    readonly_fields = ("date_joined", "last_login")
    inlines = [ProfileInline, UserRoleInline]

    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = ((None, {"classes": ("wide",), "fields": ("email", "username", "password1", "password2")}),)


@admin.register(Seller)
class SellerAdmin(admin.ModelAdmin):
    list_display = ("shop_name", "owner_name", "city", "status", "created_at", "reviewed_at")
    list_filter = ("status", "business_type", "state")
    search_fields = ("shop_name", "owner_name", "email", "user__email", "city")
    readonly_fields = ("created_at", "updated_at", "reviewed_at", "reviewed_by")
    raw_id_fields = ("user",)

    fieldsets = (
        ("Shop", {"fields": ("user", "shop_name", "business_type", "years_in_business")}),
        ("Contact", {"fields": ("owner_name", "phone_number", "alternate_phone", "whatsapp_number", "email")}),
        ("Address", {"fields": ("address", "city", "state", "country", "pincode")}),
        ("Online", {"fields": ("instagram_url", "website_url"), "classes": ("collapse",)}),
        ("Moderation", {"fields": ("status", "rejection_reason", "reviewed_by", "reviewed_at")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )


@admin.register(LoginEvent)
class LoginEventAdmin(admin.ModelAdmin):
    list_display = ("email", "success", "failure_reason", "ip_address", "created_at")
    list_filter = ("success", "failure_reason")
    search_fields = ("email",)
    readonly_fields = ("user", "email", "success", "failure_reason", "ip_address", "user_agent", "created_at")
