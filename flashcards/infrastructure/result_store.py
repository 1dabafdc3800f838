import json
from pathlib import Path
from typing import Union

from flashcards.domain.errors import ResultPersistenceError
from flashcards.domain.models.quiz_models import InternalQuizResult
from fc_utils.logger_utils import logger


class JsonResultStore:
    """Writes graded quiz results to disk, one pretty-printed JSON file per quiz id."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, result: InternalQuizResult) -> Path:
        return self.directory / f"{result.id}.json"

    def save(self, result: InternalQuizResult) -> Path:
        """
        Store a graded quiz. Grading the same quiz again replaces its file.

        :param result: The internal result, with per-prompt outcomes.
        :return: Where the result was written.
        :raises ResultPersistenceError: if the file cannot be written.
        """
        path = self.path_for(result)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(result.to_dict(), indent=2, sort_keys=True),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Failed to save quiz result to {path}: {e}", exc_info=True)
            raise ResultPersistenceError() from e

        logger.info(
            "Saved quiz result",
            extra={"quiz_id": str(result.id), "path": str(path), "component": "result_store"},
        )
        return path
