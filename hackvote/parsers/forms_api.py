"""Parser for responses fetched from the forms API as JSON."""

import json

from hackvote.models import Category, SubmittedAnswer
from hackvote.parsers import register_parser
from hackvote.parsers.base import ResponseParser


@register_parser
class FormsApiParser(ResponseParser):
    """Parser for a form definition bundled with its responses.

    The API returns responses keyed by question id, without saying which
    question is which, so the form definition must come along:

        {"form": {"items": [...]}, "responses": [...]}

    Each ranking grid is an item with a "questionGroupItem" whose questions
    are the grid rows; a row's "rowQuestion.title" is the project and the
    item title is the category. Grids without a title are taken to be the
    categories in their usual order (impact, readiness, presentation).

    A grid answer is a "textAnswers" entry whose first value is the chosen
    column label.
    """

    def can_parse(self, source: str) -> bool:
        """API bundles have no recognizable name; they are detected by content."""
        return False

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check for a JSON object with "form" and "responses" keys."""
        try:
            data = json.loads(content.decode("utf-8", errors="replace"))
        except json.JSONDecodeError:
            return False
        return isinstance(data, dict) and "form" in data and "responses" in data

    def parse(self, content: bytes) -> list[SubmittedAnswer]:
        data = json.loads(content.decode("utf-8", errors="replace"))
        if not isinstance(data, dict) or not isinstance(data.get("form"), dict):
            raise ValueError("Expected a JSON object with a 'form' definition")

        questions = self._map_questions(data["form"])
        if not questions:
            raise ValueError("Form has no ranking grid questions")

        answers = []
        for response in data.get("responses") or []:
            email = response.get("respondentEmail", "")
            timestamp = response.get("lastSubmittedTime") or response.get("createTime", "")
            for question_id, answer in (response.get("answers") or {}).items():
                if question_id not in questions:
                    continue
                category, project = questions[question_id]
                values = (answer.get("textAnswers") or {}).get("answers") or []
                label = values[0].get("value", "") if values else ""
                answers.append(SubmittedAnswer(
                    timestamp=timestamp,
                    voter_email=email,
                    category=category,
                    project=project,
                    label=label,
                ))
        return answers

    @staticmethod
    def _map_questions(form: dict) -> dict[str, tuple[str, str]]:
        """Map each grid row's question id to its (category, project)."""
        default_categories = [category.display_name for category in Category]
        questions: dict[str, tuple[str, str]] = {}
        grid_index = 0
        for item in form.get("items") or []:
            group = item.get("questionGroupItem")
            if not group:
                continue
            category = (item.get("title") or "").strip()
            if not category and grid_index < len(default_categories):
                category = default_categories[grid_index]
            grid_index += 1
            if not category:
                continue
            for question in group.get("questions") or []:
                question_id = question.get("questionId")
                project = ((question.get("rowQuestion") or {}).get("title") or "").strip()
                if question_id and project:
                    questions[question_id] = (category, project)
        return questions
