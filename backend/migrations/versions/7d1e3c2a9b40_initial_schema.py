"""initial vidshare schema

Revision ID: 7d1e3c2a9b40
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '7d1e3c2a9b40'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=False),
        sa.Column('avatar', sa.String(length=500), nullable=False),
        sa.Column('cover_image', sa.String(length=500), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('refresh_token', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
        sa.UniqueConstraint('username', name='uq_users_username'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_username', 'users', ['username'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('video_file', sa.String(length=500), nullable=False),
        sa.Column('thumbnail', sa.String(length=500), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_published', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_videos_owner_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_videos'),
    )
    op.create_index('ix_videos_owner', 'videos', ['owner_id'])
    op.create_index('ix_videos_published_created', 'videos', ['is_published', 'created_at'])

    op.create_table(
        'watch_history',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_watch_history_user_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name='fk_watch_history_video_id_videos', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_watch_history'),
        sa.UniqueConstraint('user_id', 'video_id', name='uq_watch_history_user_video'),
    )
    op.create_index('ix_watch_history_user', 'watch_history', ['user_id'])

    op.create_table(
        'tweets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_tweets_owner_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_tweets'),
    )
    op.create_index('ix_tweets_owner', 'tweets', ['owner_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_comments_owner_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name='fk_comments_video_id_videos', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_comments'),
    )
    op.create_index('ix_comments_video_created', 'comments', ['video_id', 'created_at'])
    op.create_index('ix_comments_owner', 'comments', ['owner_id'])

    op.create_table(
        'likes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('liked_by_id', sa.Integer(), nullable=False),
        sa.Column('video_id', sa.Integer(), nullable=True),
        sa.Column('comment_id', sa.Integer(), nullable=True),
        sa.Column('tweet_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            '(CASE WHEN video_id IS NOT NULL THEN 1 ELSE 0 END)'
            ' + (CASE WHEN comment_id IS NOT NULL THEN 1 ELSE 0 END)'
            ' + (CASE WHEN tweet_id IS NOT NULL THEN 1 ELSE 0 END) = 1',
            name='ck_likes_exactly_one_target',
        ),
        sa.ForeignKeyConstraint(['liked_by_id'], ['users.id'], name='fk_likes_liked_by_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['video_id'], ['videos.id'], name='fk_likes_video_id_videos', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['comment_id'], ['comments.id'], name='fk_likes_comment_id_comments', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tweet_id'], ['tweets.id'], name='fk_likes_tweet_id_tweets', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_likes'),
        sa.UniqueConstraint('liked_by_id', 'video_id', name='uq_likes_user_video'),
        sa.UniqueConstraint('liked_by_id', 'comment_id', name='uq_likes_user_comment'),
        sa.UniqueConstraint('liked_by_id', 'tweet_id', name='uq_likes_user_tweet'),
    )
    op.create_index('ix_likes_video', 'likes', ['video_id'])
    op.create_index('ix_likes_comment', 'likes', ['comment_id'])
    op.create_index('ix_likes_tweet', 'likes', ['tweet_id'])

    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('subscriber_id', sa.Integer(), nullable=False),
        sa.Column('channel_id', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('subscriber_id <> channel_id', name='ck_subscriptions_not_self'),
        sa.ForeignKeyConstraint(['subscriber_id'], ['users.id'], name='fk_subscriptions_subscriber_id_users', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['channel_id'], ['users.id'], name='fk_subscriptions_channel_id_users', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='pk_subscriptions'),
        sa.UniqueConstraint('subscriber_id', 'channel_id', name='uq_subscriptions_pair'),
    )
    op.create_index('ix_subscriptions_channel', 'subscriptions', ['channel_id'])


def downgrade():
    op.drop_table('subscriptions')
    op.drop_table('likes')
    op.drop_table('comments')
    op.drop_table('tweets')
    op.drop_table('watch_history')
    op.drop_table('videos')
    op.drop_table('users')
