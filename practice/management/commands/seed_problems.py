import json
import os
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from practice.models import Problem, Topic


class Command(BaseCommand):
    help = "Replace the topic/problem catalog with the contents of a JSON file"

    def add_arguments(self, parser):
        parser.add_argument(
            "--file", default="SAMPLE_PROBLEMS.json", help="JSON file name to load data from"
        )

    def handle(self, *args, **options):
        file_name = options.get("file", "SAMPLE_PROBLEMS.json")
        json_file_path = file_name
        if not os.path.isabs(json_file_path):
            json_file_path = os.path.join(os.path.dirname(__file__), file_name)

        try:
            with open(json_file_path) as json_file:
                data = json.load(json_file)
        except (OSError, json.JSONDecodeError) as e:
            raise CommandError(f"Error loading data from {file_name}: {e}") from e

        topics = data.get("topics", [])
        problems = data.get("problems", [])
        known_topics = {t["id"] for t in topics}

        for p in problems:
            if p.get("topic") and p["topic"] not in known_topics:
                raise CommandError(f"Problem {p['id']} references unknown topic {p['topic']}")

        with transaction.atomic():
            Problem.objects.all().delete()
            Topic.objects.all().delete()
            self.stdout.write(self.style.SUCCESS("All existing catalog data has been deleted"))

            Topic.objects.bulk_create(Topic(id=t["id"], name=t["name"]) for t in topics)
            Problem.objects.bulk_create(
                Problem(
                    id=p["id"],
                    name=p["name"],
                    difficulty=p.get("difficulty", ""),
                    topic_id=p.get("topic"),
                )
                for p in problems
            )

        self.stdout.write(
            self.style.SUCCESS(
                f"Loaded {len(topics)} topics and {len(problems)} problems from {file_name}"
            )
        )
