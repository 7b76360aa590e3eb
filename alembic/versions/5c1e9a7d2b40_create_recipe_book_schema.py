"""create recipe book schema

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e9a7d2b40"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps() -> list[sa.Column]:
    """created_at / updated_at columns matching TimestampMixin."""
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def recipe_ref() -> list[sa.Column]:
    """recipe_source / recipe_id columns matching RecipeRefMixin."""
    return [
        sa.Column("recipe_source", sa.String(20), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("username", sa.String(8), nullable=False, unique=True, index=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("country", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        *timestamps(),
    )

    # Personal recipes
    op.create_table(
        "user_recipes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("ready_in_minutes", sa.Integer(), nullable=True),
        sa.Column("popularity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_vegan", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_vegetarian", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_gluten_free", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("servings", sa.Integer(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_table(
        "user_recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id", sa.Integer(), sa.ForeignKey("user_recipes.id"), nullable=False, index=True
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(50), nullable=True),
        *timestamps(),
    )

    # Family recipes
    op.create_table(
        "family_recipes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("owner_name", sa.String(255), nullable=False),
        sa.Column("when_to_prepare", sa.String(255), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("ready_in_minutes", sa.Integer(), nullable=True),
        sa.Column("servings", sa.Integer(), nullable=True),
        *timestamps(),
    )
    op.create_table(
        "family_recipe_ingredients",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column(
            "recipe_id",
            sa.Integer(),
            sa.ForeignKey("family_recipes.id"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("unit", sa.String(50), nullable=True),
        *timestamps(),
    )

    # Steps and progress, keyed by recipe reference
    op.create_table(
        "recipe_preparation_steps",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        *recipe_ref(),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        *timestamps(),
        sa.UniqueConstraint(
            "recipe_source", "recipe_id", "step_number", name="uq_recipe_step_number"
        ),
    )
    op.create_index(
        "ix_recipe_steps_ref", "recipe_preparation_steps", ["recipe_source", "recipe_id"]
    )

    op.create_table(
        "recipe_preparation_progress",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        *recipe_ref(),
        sa.Column("step_number", sa.Integer(), nullable=False),
        sa.Column("is_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.UniqueConstraint(
            "user_id",
            "recipe_source",
            "recipe_id",
            "step_number",
            name="uq_progress_user_recipe_step",
        ),
    )
    op.create_index(
        "ix_progress_ref", "recipe_preparation_progress", ["recipe_source", "recipe_id"]
    )

    # User activity
    op.create_table(
        "user_favorites",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        *recipe_ref(),
        *timestamps(),
        sa.UniqueConstraint(
            "user_id", "recipe_source", "recipe_id", name="uq_favorite_user_recipe"
        ),
    )
    op.create_table(
        "recipe_views",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        *recipe_ref(),
        sa.Column(
            "viewed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_table(
        "search_history",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("search_query", sa.String(255), nullable=False, server_default=""),
        sa.Column("cuisine_filter", sa.String(100), nullable=True),
        sa.Column("diet_filter", sa.String(100), nullable=True),
        sa.Column("intolerance_filter", sa.String(255), nullable=True),
        sa.Column("results_limit", sa.Integer(), nullable=False, server_default="5"),
        sa.Column(
            "searched_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
    )
    op.create_table(
        "meal_plans",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False, index=True),
        *recipe_ref(),
        sa.Column("order_in_meal", sa.Integer(), nullable=False),
        *timestamps(),
    )
    op.create_table(
        "recipe_likes",
        sa.Column("id", sa.Integer(), primary_key=True, index=True),
        *recipe_ref(),
        sa.Column("likes_count", sa.Integer(), nullable=False, server_default="0"),
        *timestamps(),
        sa.UniqueConstraint("recipe_source", "recipe_id", name="uq_recipe_like_ref"),
    )


def downgrade() -> None:
    op.drop_table("recipe_likes")
    op.drop_table("meal_plans")
    op.drop_table("search_history")
    op.drop_table("recipe_views")
    op.drop_table("user_favorites")
    op.drop_index("ix_progress_ref", table_name="recipe_preparation_progress")
    op.drop_table("recipe_preparation_progress")
    op.drop_index("ix_recipe_steps_ref", table_name="recipe_preparation_steps")
    op.drop_table("recipe_preparation_steps")
    op.drop_table("family_recipe_ingredients")
    op.drop_table("family_recipes")
    op.drop_table("user_recipe_ingredients")
    op.drop_table("user_recipes")
    op.drop_table("users")
