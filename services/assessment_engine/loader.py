import logging
import yaml
from pydantic import ValidationError
from typing import Dict, Any

from services.assessment_engine.models import QuestionBank, QuestionBankConfig, QuestionBankValidationError

logger = logging.getLogger(__name__)


def load_question_bank_data(data: Dict[str, Any]) -> QuestionBank:
    """
    Validates the raw dictionary data against the QuestionBankConfig model
    and builds a QuestionBank, which performs the integrity checks
    (unique IDs, correct_id referencing an existing option).
    """
    try:
        config = QuestionBankConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise Pydantic's validation error for schema issues
        raise e

    bank = QuestionBank(config.questions, title=config.title, round_label=config.round_label)
    logger.info(f"Loaded question bank '{config.title}' v{config.version} with {bank.count()} questions")
    return bank


def load_question_bank_from_file(file_path: str) -> QuestionBank:
    """
    Loads a question bank from a YAML file, validates it,
    and returns a QuestionBank.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise QuestionBankValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise QuestionBankValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise QuestionBankValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_question_bank_data(data)
