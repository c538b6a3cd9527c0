from django.db import models


class Topic(models.Model):
    """
    A category problems are grouped under.
    """

    id = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=200)

    def __str__(self):
        return self.name


class Problem(models.Model):
    """
    Catalog entry for a practice problem. Only problems attached to a topic
    can enter spaced repetition.
    """

    id = models.CharField(primary_key=True, max_length=64)
    name = models.CharField(max_length=200)
    difficulty = models.CharField(max_length=16, blank=True, default="")
    topic = models.ForeignKey(
        Topic, null=True, blank=True, on_delete=models.SET_NULL, related_name="problems"
    )

    def __str__(self):
        return self.name
