"""Tweet endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from vidshare.api.deps import api_response, authenticate_request, current_user, timing, tweet_service
from vidshare.schemas import ContentSchema, TweetSchema

bp = Blueprint("tweets", __name__)
bp.before_request(authenticate_request)

content_schema = ContentSchema()
tweet_schema = TweetSchema()


@bp.post("/createTweet")
@timing
def create_tweet():
    data = content_schema.load(request.get_json(silent=True) or {})
    tweet = tweet_service().create(current_user().id, data["content"])
    return api_response(tweet_schema.dump(tweet), "Tweet created successfully", status=201)


@bp.post("/getUserTweets/<user_id>")
@timing
def user_tweets(user_id: str):
    tweets = tweet_service().list_for_user(user_id)
    return api_response(tweet_schema.dump(tweets, many=True), "Tweets fetched successfully")


@bp.post("/updateTweet/<tweet_id>")
@timing
def update_tweet(tweet_id: str):
    data = content_schema.load(request.get_json(silent=True) or {})
    tweet = tweet_service().update(current_user().id, tweet_id, data["content"])
    return api_response(tweet_schema.dump(tweet), "Tweet updated successfully")


@bp.post("/deleteTweet/<tweet_id>")
@timing
def delete_tweet(tweet_id: str):
    tweet_service().delete(current_user().id, tweet_id)
    return api_response({}, "Tweet deleted successfully")
