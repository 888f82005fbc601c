from marshmallow import fields

from ..extensions import ma
from ..services.stats import most_voted_option_text


class PollStatsSchema(ma.Schema):
    """Dumps a ``(poll, PollStats)`` pair."""

    poll_id = fields.Method("get_poll_id")
    vote_counts = fields.Method("get_vote_counts")
    total_votes = fields.Method("get_total_votes")
    percentages = fields.Method("get_percentages")
    most_voted_option = fields.Method("get_most_voted_option")
    most_voted_option_text = fields.Method("get_most_voted_option_text")
    most_voted_count = fields.Method("get_most_voted_count")

    def get_poll_id(self, obj):
        return str(obj[0].id)

    def get_vote_counts(self, obj):
        return list(obj[1].vote_counts)

    def get_total_votes(self, obj):
        return obj[1].total_votes

    def get_percentages(self, obj):
        return list(obj[1].percentages())

    def get_most_voted_option(self, obj):
        return obj[1].most_voted_option

    def get_most_voted_option_text(self, obj):
        poll, stats = obj
        return most_voted_option_text(poll.options, stats)

    def get_most_voted_count(self, obj):
        return obj[1].most_voted_count
