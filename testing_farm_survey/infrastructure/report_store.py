from pathlib import Path

from testing_farm_survey.domain.models import AnalysisResult

class JsonReportRepository:
    """
    Persists the AnalysisResult as a JSON document.
    Each save overwrites whatever was previously stored at the path.
    """

    def __init__(self, output_path: str):
        self.output_path = Path(output_path)

    def save(self, result: AnalysisResult) -> Path:
        """
        Writes the result to the configured path.

        Args:
            result (AnalysisResult): The analysis outcome to persist.

        Returns:
            Path: The file that was written.
        """
        self.output_path.write_text(result.model_dump_json(indent=2) + "\n", encoding="utf-8")
        return self.output_path
