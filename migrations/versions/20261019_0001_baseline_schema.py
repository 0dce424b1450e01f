"""
Baseline schema: managers and hierarchy, catalogue, funnels, projects,
subprojects, tasks, sales and comments.

Revision ID: baseline_20261019
Revises:
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'baseline_20261019'
down_revision = None
branch_labels = None
depends_on = None

MONEY = sa.Numeric(14, 2)


def _timestamps(updated: bool = True):
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), nullable=True)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True))
    return cols


def upgrade() -> None:
    op.create_table(
        'managers',
        sa.Column('manager_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone_number', sa.String(50), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='manager'),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("role in ('admin','head','manager')", name='ck_managers_role'),
    )
    op.create_index('ix_managers_email', 'managers', ['email'], unique=True)

    op.create_table(
        'manager_hierarchy',
        sa.Column('supervisor_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('subordinate_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'units',
        sa.Column('unit_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(50), nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        'warehouses',
        sa.Column('warehouse_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('location', sa.String(500), nullable=True),
        *_timestamps(updated=False),
    )

    op.create_table(
        'products',
        sa.Column('product_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('sku', sa.String(100), nullable=True, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', MONEY, nullable=False, server_default='0'),
        sa.Column('unit_id', sa.Integer(), sa.ForeignKey('units.unit_id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'product_stocks',
        sa.Column('product_stock_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False),
        sa.Column('warehouse_id', sa.Integer(), sa.ForeignKey('warehouses.warehouse_id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('product_id', 'warehouse_id', name='uq_product_stocks_product_warehouse'),
    )

    op.create_table(
        'services',
        sa.Column('service_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', MONEY, nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'sale_status_types',
        sa.Column('sale_status_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        'subproject_status_types',
        sa.Column('sub_project_status_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        *_timestamps(updated=False),
    )

    op.create_table(
        'counterparties',
        sa.Column('counterparty_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('counterparty_type', sa.String(20), nullable=False, server_default='LEGAL_ENTITY'),
        sa.Column('responsible_manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("counterparty_type in ('INDIVIDUAL','LEGAL_ENTITY')", name='ck_counterparties_type'),
    )
    op.create_index('idx_counterparties_responsible_manager_id', 'counterparties', ['responsible_manager_id'])

    op.create_table(
        'funnels',
        sa.Column('funnel_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_table(
        'funnel_stages',
        sa.Column('funnel_stage_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('funnel_id', sa.Integer(), sa.ForeignKey('funnels.funnel_id', ondelete='CASCADE'), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(updated=False),
    )
    op.create_index('idx_funnel_stages_funnel_id', 'funnel_stages', ['funnel_id'])

    op.create_table(
        'subproject_funnels',
        sa.Column('sub_project_funnel_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_table(
        'subproject_funnel_stages',
        sa.Column('sub_project_funnel_stage_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column(
            'sub_project_funnel_id',
            sa.Integer(),
            sa.ForeignKey('subproject_funnels.sub_project_funnel_id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(updated=False),
    )
    op.create_index('idx_subproject_funnel_stages_funnel_id', 'subproject_funnel_stages', ['sub_project_funnel_id'])

    op.create_table(
        'projects',
        sa.Column('project_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('main_responsible_manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True),
        sa.Column('counterparty_id', sa.Integer(), sa.ForeignKey('counterparties.counterparty_id', ondelete='SET NULL'), nullable=True),
        sa.Column('funnel_id', sa.Integer(), sa.ForeignKey('funnels.funnel_id', ondelete='SET NULL'), nullable=True),
        sa.Column('funnel_stage_id', sa.Integer(), sa.ForeignKey('funnel_stages.funnel_stage_id', ondelete='SET NULL'), nullable=True),
        sa.Column('forecast_amount', MONEY, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('idx_projects_main_manager_id', 'projects', ['main_responsible_manager_id'])

    op.create_table(
        'project_managers',
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='CASCADE'), primary_key=True),
        sa.Column('manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='CASCADE'), primary_key=True),
        *_timestamps(updated=False),
    )
    op.create_table(
        'project_products',
        sa.Column('project_product_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(updated=False),
    )
    op.create_table(
        'project_services',
        sa.Column('project_service_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.service_id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False, server_default='1'),
        *_timestamps(updated=False),
    )

    op.create_table(
        'subprojects',
        sa.Column('subproject_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='CASCADE'), nullable=True),
        sa.Column('parent_subproject_id', sa.Integer(), sa.ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=True),
        sa.Column('status', sa.String(100), nullable=True),
        sa.Column('cost', MONEY, nullable=False, server_default='0'),
        sa.Column(
            'sub_project_funnel_id',
            sa.Integer(),
            sa.ForeignKey('subproject_funnels.sub_project_funnel_id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column(
            'sub_project_funnel_stage_id',
            sa.Integer(),
            sa.ForeignKey('subproject_funnel_stages.sub_project_funnel_stage_id', ondelete='SET NULL'),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index('idx_subprojects_project_id', 'subprojects', ['project_id'])
    op.create_index('idx_subprojects_parent_id', 'subprojects', ['parent_subproject_id'])

    op.create_table(
        'subproject_products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('subproject_id', sa.Integer(), sa.ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.product_id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        *_timestamps(updated=False),
    )
    op.create_table(
        'subproject_services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('subproject_id', sa.Integer(), sa.ForeignKey('subprojects.subproject_id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.service_id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False, server_default='1'),
        *_timestamps(updated=False),
    )

    op.create_table(
        'tasks',
        sa.Column('task_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='new'),
        sa.Column('priority', sa.String(20), nullable=True),
        sa.Column('responsible_manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True),
        sa.Column('creator_manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='SET NULL'), nullable=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='SET NULL'), nullable=True),
        sa.Column('subproject_id', sa.Integer(), sa.ForeignKey('subprojects.subproject_id', ondelete='SET NULL'), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("status in ('new','in_progress','blocked','done','cancelled')", name='ck_tasks_status'),
    )
    op.create_index('idx_tasks_responsible_manager_id', 'tasks', ['responsible_manager_id'])
    op.create_index('idx_tasks_creator_manager_id', 'tasks', ['creator_manager_id'])

    op.create_table(
        'sales',
        sa.Column('sale_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('counterparty_id', sa.Integer(), sa.ForeignKey('counterparties.counterparty_id'), nullable=False),
        sa.Column('responsible_manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id'), nullable=False),
        sa.Column('sale_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(100), nullable=False),
        sa.Column('deferred_payment_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('project_id', sa.Integer(), sa.ForeignKey('projects.project_id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )
    op.create_index('idx_sales_responsible_manager_id', 'sales', ['responsible_manager_id'])

    op.create_table(
        'sale_products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('sale_id', sa.Integer(), sa.ForeignKey('sales.sale_id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.product_id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
    )
    op.create_table(
        'sale_services',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('sale_id', sa.Integer(), sa.ForeignKey('sales.sale_id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer(), sa.ForeignKey('services.service_id'), nullable=False),
    )

    for table, parent, parent_table, parent_pk in (
        ('project_comments', 'project_id', 'projects', 'project_id'),
        ('subproject_comments', 'subproject_id', 'subprojects', 'subproject_id'),
    ):
        op.create_table(
            table,
            sa.Column('comment_id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column(parent, sa.Integer(), sa.ForeignKey(f'{parent_table}.{parent_pk}', ondelete='CASCADE'), nullable=False),
            sa.Column('manager_id', sa.Integer(), sa.ForeignKey('managers.manager_id', ondelete='CASCADE'), nullable=False),
            sa.Column('content', sa.Text(), nullable=False, server_default=''),
            sa.Column('file_name', sa.String(255), nullable=True),
            sa.Column('file_type', sa.String(255), nullable=True),
            sa.Column('file_url', sa.String(1024), nullable=True),
            sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps(),
        )
        op.create_index(f'idx_{table}_{parent}_created_at', table, [parent, 'created_at'])


def downgrade() -> None:
    for table in (
        'subproject_comments',
        'project_comments',
        'sale_services',
        'sale_products',
        'sales',
        'tasks',
        'subproject_services',
        'subproject_products',
        'subprojects',
        'project_services',
        'project_products',
        'project_managers',
        'projects',
        'subproject_funnel_stages',
        'subproject_funnels',
        'funnel_stages',
        'funnels',
        'counterparties',
        'subproject_status_types',
        'sale_status_types',
        'services',
        'product_stocks',
        'products',
        'warehouses',
        'units',
        'manager_hierarchy',
        'managers',
    ):
        op.drop_table(table)
