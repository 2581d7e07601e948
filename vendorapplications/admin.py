from django.contrib import admin
from .models import VendorApplication, VendorApplicationDocument


class VendorApplicationDocumentInline(admin.TabularInline):
    model = VendorApplicationDocument
    extra = 0
    readonly_fields = ('kind', 'documentUrl', 'createdAt')


@admin.register(VendorApplication)
class VendorApplicationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'type', 'status', 'businessName', 'fullNameOnId', 'createdAt')
    list_filter = ('type', 'status')
    search_fields = ('user__phone', 'businessName', 'fullNameOnId')
    inlines = [VendorApplicationDocumentInline]
