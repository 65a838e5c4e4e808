from alembic import op

revision = '0002_add_fks'
down_revision = '0001_init'
branch_labels = None
depends_on = None

# Movement history must survive deletion of the item or staff member it names
FOREIGN_KEYS = [
    ('fk_transactions_item_id_inventory_items', 'transactions', 'inventory_items', 'item_id'),
    ('fk_transactions_staff_id_staff_members', 'transactions', 'staff_members', 'staff_id'),
    ('fk_user_profiles_staff_id_staff_members', 'user_profiles', 'staff_members', 'staff_id'),
]

def upgrade():
    for name, source, referent, column in FOREIGN_KEYS:
        op.create_foreign_key(
            name,
            source_table=source,
            referent_table=referent,
            local_cols=[column],
            remote_cols=['id'],
            ondelete='SET NULL'
        )

def downgrade():
    for name, source, _, _ in reversed(FOREIGN_KEYS):
        op.drop_constraint(name, source, type_='foreignkey')
