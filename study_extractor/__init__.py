from .datatypes import (Sentence, ScoredSentence, KeyPoint, TimelineEvent, Flashcard, QuizQuestion,
                        QuizResult, SearchResult, WikiSection, TopicData, StudyMaterial)
from .preprocessing import SentenceStream, split_sentences, iter_sentences, clean_sentence, MASK
from .features import sentence_features, token_features, extract_features
from .scoring import score_sentences, rank_sentences, best_token
from .keypoints import generate_key_points
from .timeline import generate_timeline
from .flashcards import generate_flashcards
from .quiz import generate_quiz, quiz_rounds, grade_answers
from .pipeline import build_study_material, study_material_for_topic
