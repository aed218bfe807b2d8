#!/usr/bin/env python3
"""
Glossary Tooltip REST API Server
Provides HTTP endpoints for annotating text with glossary tooltips
"""

import logging
import sys
from pathlib import Path

from flask import Flask, jsonify, request
from flask_cors import CORS

from glossary_tooltip.core.annotator import TermAnnotator
from glossary_tooltip.core.config import AnnotatorConfig, GlossaryTooltipConfig
from glossary_tooltip.core.formatter import GlossaryTooltipFormatter
from glossary_tooltip.core.vocabulary import Vocabulary, VocabularyError, vocabulary_from_data

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / 'glossary_tooltip' / 'static'

app = Flask(__name__, static_folder=str(STATIC_DIR), static_url_path='/static')
CORS(app)  # Enable CORS for browser frontends

# Global components (initialized once)
config = None
formatter = None


def initialize_components(custom_config=None):
    """Initialize configuration and the configured vocabulary source"""
    global config, formatter

    config = custom_config or GlossaryTooltipConfig()
    logging.basicConfig(level=config.log_level)

    if config.vocabulary_path:
        formatter = GlossaryTooltipFormatter(config.vocabulary_path, config.annotator)
        logger.info(f"Glossary vocabulary source: {config.vocabulary_path}")
    else:
        formatter = None
        logger.warning("No vocabulary configured; requests must send one inline")

    return True


@app.before_request
def ensure_initialized():
    if config is None:
        initialize_components()


def _annotator_for(data):
    """Per-request annotator honouring the legacy flag"""
    base = config.annotator
    legacy = data.get('legacy')
    if legacy is None:
        legacy = base.legacy_ordered_replace
    return TermAnnotator(AnnotatorConfig(
        max_description_length=base.max_description_length,
        read_more_label=base.read_more_label,
        legacy_ordered_replace=legacy,
        detail_url_template=base.detail_url_template,
    ))


@app.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint"""
    return jsonify({"status": "healthy", "message": "Glossary Tooltip API is running"})


@app.route('/api/annotate', methods=['POST'])
def annotate():
    """Annotate text with the inline or configured vocabulary"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Expected a JSON object"}), 400

    text = data.get('text')
    if not isinstance(text, str):
        return jsonify({"error": "No text provided"}), 400

    max_length = data.get('max_description_length')
    # bool is a subclass of int, so JSON true/false must be ruled out explicitly
    if max_length is not None and (isinstance(max_length, bool)
                                   or not isinstance(max_length, int) or max_length < 0):
        return jsonify({"error": "max_description_length must be a non-negative integer"}), 400

    if data.get('legacy') is not None and not isinstance(data['legacy'], bool):
        return jsonify({"error": "legacy must be a boolean"}), 400

    try:
        annotator = _annotator_for(data)

        if 'vocabulary' in data:
            try:
                vocabulary = vocabulary_from_data(data['vocabulary'],
                                                  config.annotator.detail_url_template)
            except VocabularyError as e:
                return jsonify({"error": str(e)}), 400
        elif formatter is not None:
            # Unannotated text is returned when the configured source fails
            vocabulary = formatter.load_vocabulary() or Vocabulary()
        else:
            vocabulary = Vocabulary()

        annotated = annotator.annotate(vocabulary, text, max_length)
        found = annotator.find_terms(vocabulary, text, max_length)

        return jsonify({
            "text": annotated,
            "terms": [{"name": term.name, "count": count} for term, count in found],
        })

    except Exception as e:
        logger.exception("Annotation failed")
        return jsonify({"error": f"Annotation failed: {str(e)}"}), 500


@app.route('/api/vocabulary', methods=['GET'])
def list_vocabulary():
    """List (or search with ?q=) the configured vocabulary"""
    if formatter is None:
        return jsonify({"error": "No vocabulary configured"}), 404

    loaded = formatter.load_vocabulary()
    if loaded is None:
        return jsonify({"error": "Vocabulary unavailable"}), 503

    query = request.args.get('q')
    terms = loaded.search(query) if query else list(loaded)
    return jsonify({
        "terms": Vocabulary(terms).to_records(),
        "total": len(loaded),
    })


if __name__ == '__main__':
    print("Starting Glossary Tooltip API server...")

    if initialize_components():
        print("\nStarting Flask server on http://localhost:8000")
        print("Press Ctrl+C to stop\n")
        app.run(host='0.0.0.0', port=8000, debug=False)
    else:
        print("Failed to start Glossary Tooltip API server")
        sys.exit(1)
