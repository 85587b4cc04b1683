from .user_model import User
from .tweet_model import Tweet, TweetHashtag
from .hashtag_model import Hashtag
from .like_model import Like
