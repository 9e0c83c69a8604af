"""
initial schema: users, recipes, ingredients, meal plans

Revision ID: 20261012_initial_schema
Revises:
Create Date: 2026-10-12 09:30:00
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20261012_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('display_name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('is_banned', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'recipes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=160), nullable=False),
    )

    op.create_table(
        'ingredients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('recipe_id', sa.Integer(), sa.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('quantity', sa.String(length=40), nullable=False),
        sa.Column('unit', sa.String(length=24), nullable=True),
    )
    op.create_index('ix_ingredients_recipe_id', 'ingredients', ['recipe_id'])

    op.create_table(
        'meal_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
    )
    op.create_index('ix_meal_plans_user_id', 'meal_plans', ['user_id'])
    op.create_index('ix_meal_plans_start_date', 'meal_plans', ['start_date'])
    op.create_index('ix_meal_plans_end_date', 'meal_plans', ['end_date'])

    op.create_table(
        'meal_plan_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('meal_plan_id', sa.Integer(), sa.ForeignKey('meal_plans.id', ondelete='CASCADE'), nullable=False),
        # Plain reference: recipes may be deleted while plans still name them
        sa.Column('recipe_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('meal_type', sa.String(length=32), nullable=False),
    )
    op.create_index('ix_meal_plan_items_meal_plan_id', 'meal_plan_items', ['meal_plan_id'])
    op.create_index('ix_meal_plan_items_recipe_id', 'meal_plan_items', ['recipe_id'])
    op.create_index('ix_meal_plan_items_date', 'meal_plan_items', ['date'])


def downgrade() -> None:
    op.drop_table('meal_plan_items')
    op.drop_table('meal_plans')
    op.drop_table('ingredients')
    op.drop_table('recipes')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
