from django.contrib import admin

from festivals.models import Festival, Plan, PlanItem, Set, Stage


class StageInline(admin.TabularInline):
    model = Stage
    extra = 1


class PlanItemInline(admin.TabularInline):
    model = PlanItem
    extra = 0
    raw_id_fields = ["set"]


@admin.register(Festival)
class FestivalAdmin(admin.ModelAdmin):
    list_display = ["name", "slug", "city", "country", "start_date", "end_date"]
    search_fields = ["name", "slug", "city"]
    prepopulated_fields = {"slug": ["name"]}
    inlines = [StageInline]


@admin.register(Set)
class SetAdmin(admin.ModelAdmin):
    list_display = ["artist", "stage", "date", "start_time", "end_time"]
    list_filter = ["festival", "stage", "date"]
    search_fields = ["artist"]


@admin.register(Plan)
class PlanAdmin(admin.ModelAdmin):
    list_display = ["name", "user", "festival", "created_at"]
    list_filter = ["festival"]
    inlines = [PlanItemInline]
