from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_incidents'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'incidents',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('status', sa.Integer, nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('visible', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('stickied', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('scheduled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_incidents_status', 'incidents', ['status'])
    op.create_index('ix_incidents_visible_stickied', 'incidents', ['visible', 'stickied'])
    op.create_index('ix_incidents_created_at', 'incidents', ['created_at'])
    op.create_index('ix_incidents_deleted_at', 'incidents', ['deleted_at'])

    op.create_table(
        'incident_updates',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('incident_id', sa.Integer, sa.ForeignKey('incidents.id'), nullable=False),
        sa.Column('status', sa.Integer, nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_incident_updates_incident_id', 'incident_updates', ['incident_id'])
    op.create_index('ix_incident_updates_created_at', 'incident_updates', ['created_at'])
    op.create_index(
        'ix_incident_updates_incident_created', 'incident_updates', ['incident_id', 'created_at']
    )


def downgrade() -> None:
    op.drop_index('ix_incident_updates_incident_created', table_name='incident_updates')
    op.drop_index('ix_incident_updates_created_at', table_name='incident_updates')
    op.drop_index('ix_incident_updates_incident_id', table_name='incident_updates')
    op.drop_table('incident_updates')
    op.drop_index('ix_incidents_deleted_at', table_name='incidents')
    op.drop_index('ix_incidents_created_at', table_name='incidents')
    op.drop_index('ix_incidents_visible_stickied', table_name='incidents')
    op.drop_index('ix_incidents_status', table_name='incidents')
    op.drop_table('incidents')
