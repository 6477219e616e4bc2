from django.contrib import admin
from django.utils.html import format_html_join

from .models import Order, Product


class OrderInline(admin.TabularInline):
    model = Order
    extra = 0
    fields = ('buyer', 'status', 'created_at')
    readonly_fields = fields
    can_delete = False
    show_change_link = True

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('title', 'shop', 'shop_status', 'category', 'price', 'is_active', 'views', 'clicks', 'created_at')
    list_filter = ('category', 'is_active', 'seller__status', 'created_at')
    list_select_related = ('seller',)
    search_fields = ('title', 'description', 'seller__shop_name', 'seller__owner_name')
    readonly_fields = ('id', 'views', 'clicks', 'created_at', 'updated_at', 'gallery')
    date_hierarchy = 'created_at'
    inlines = [OrderInline]
    actions = ['show_products', 'hide_products']

    fieldsets = (
        (None, {'fields': ('id', 'seller', 'title', 'description', 'category', 'price')}),
        ('Pickup location', {'fields': ('city', 'state', 'phone_number')}),
        ('Photos', {'fields': ('gallery', 'image_url', 'images')}),
        ('Visibility', {'fields': ('is_active',)}),
        ('Engagement', {'fields': ('views', 'clicks', 'created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    @admin.display(description='Shop', ordering='seller__shop_name')
    def shop(self, obj):
        return obj.seller.shop_name

    @admin.display(description='Shop status')
    def shop_status(self, obj):
        return obj.seller.get_status_display()

    @admin.display(description='Photos')
    def gallery(self, obj):
        if not obj.images:
            return '-'
        return format_html_join(
            '', '<img src="{}" style="height:80px;margin-right:6px" />', ((url,) for url in obj.images)
        )

    @admin.action(description='Show selected products in the catalog')
    def show_products(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} product(s) visible.')

    @admin.action(description='Hide selected products from the catalog')
    def hide_products(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} product(s) hidden.')


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'product', 'buyer', 'shop_name', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    list_select_related = ('product', 'buyer', 'seller')
    search_fields = ('id', 'buyer__email', 'shop_name', 'product__title')
    # Snapshot and pickup code are set once at reservation
    readonly_fields = ('id', 'product', 'buyer', 'seller', 'pickup_code', 'shop_name', 'shop_address',
                       'created_at', 'updated_at')

    fieldsets = (
        (None, {'fields': ('id', 'product', 'buyer', 'seller', 'status')}),
        ('Pickup', {'fields': ('shop_name', 'shop_address', 'pickup_code')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )

    def has_add_permission(self, request):
        return False
