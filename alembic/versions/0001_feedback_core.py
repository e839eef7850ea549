from alembic import op
import sqlalchemy as sa

revision = '0001_feedback_core'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )

    op.create_table(
        'feedback_forms',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False, server_default=''),
        sa.Column('created_by', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('fields', sa.Text, nullable=True),
    )
    op.create_index('ix_feedback_forms_created_by', 'feedback_forms', ['created_by'])

    # form_id carries no FK: responses survive deletion of their form
    op.create_table(
        'feedback_responses',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('form_id', sa.Integer, nullable=False),
        sa.Column('respondent_email', sa.String(255), nullable=False, server_default='anonymous'),
        sa.Column('response_data', sa.Text, nullable=False),
        sa.Column('submitted_at', sa.TIMESTAMP(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_feedback_responses_form_id', 'feedback_responses', ['form_id'])


def downgrade():
    op.drop_index('ix_feedback_responses_form_id', table_name='feedback_responses')
    op.drop_table('feedback_responses')
    op.drop_index('ix_feedback_forms_created_by', table_name='feedback_forms')
    op.drop_table('feedback_forms')
    op.drop_table('users')
