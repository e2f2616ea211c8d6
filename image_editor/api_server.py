#!/usr/bin/env python3
"""
Image Editor API Server
One endpoint per concern: list operations, transform an upload, dump its pixels.
"""

import os
import logging
from io import BytesIO
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from flask import Flask, request, jsonify, send_file, Response
from flask_cors import CORS
from werkzeug.utils import secure_filename

from .models.edit_command import EditCommand, Operation, RotationDirection, FlipDirection
from .services.image_service import ImageService
from .services.edit_service import EditService
from .services.transform_service import TransformService

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

# Configuration
MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_SIZE_MB", "100")) * 1024 * 1024
app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

# Initialize services
image_service = ImageService()
transform_service = TransformService()
edit_service = EditService(transform_service)

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    Operation.ROTATE: [d.value for d in RotationDirection],
    Operation.FLIP: [d.value for d in FlipDirection],
}


def _load_upload():
    """Decode the multipart 'image' field into an Image, or raise ValueError."""
    if 'image' not in request.files:
        raise ValueError('No image provided')
    file = request.files['image']
    if file.filename == '':
        raise ValueError('No file selected')
    return image_service.decode(file.read(), secure_filename(file.filename))


@app.route('/api/operations', methods=['GET'])
def list_operations():
    """Describe every operation and the parameters it needs."""
    operations = []
    for op in Operation:
        command = EditCommand(op)
        operations.append({
            'id': op.value,
            'name': op.slug,
            'requires_value': command.requires_value,
            'directions': _DIRECTIONS.get(op, []),
        })
    return jsonify({'operations': operations})


@app.route('/api/transform', methods=['POST'])
def transform():
    """Apply one operation to the uploaded image and return it as JPEG."""
    try:
        command = EditCommand.from_strings(
            request.form.get('operation', ''),
            request.form.get('value'),
            request.form.get('direction'),
        )
        image = _load_upload()
        logger.info(f"Transforming upload {image.path} ({image.width}x{image.height}) "
                    f"with {command.operation.slug}")

        if not edit_service.produces_new_image(command):
            return Response(transform_service.format_pixel_values(image) + "\n",
                            mimetype='text/plain')

        edited = edit_service.execute(image, command)
        return send_file(BytesIO(image_service.encode_jpeg(edited)),
                         mimetype='image/jpeg',
                         download_name=f"{command.operation.slug}.jpg")

    except ValueError as e:  # includes InvalidParameterError
        return jsonify({'success': False, 'message': str(e)}), 400
    except Exception as e:
        logger.error(f"Transform error: {e}")
        return jsonify({'success': False, 'message': 'Error processing image'}), 500


@app.route('/api/pixels', methods=['POST'])
def pixel_values():
    """Return the blue/green/red pixel listing of the uploaded image."""
    try:
        image = _load_upload()
        return Response(transform_service.format_pixel_values(image) + "\n",
                        mimetype='text/plain')
    except ValueError as e:
        return jsonify({'success': False, 'message': str(e)}), 400
    except Exception as e:
        logger.error(f"Pixel dump error: {e}")
        return jsonify({'success': False, 'message': 'Error processing image'}), 500


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'message': 'Image Editor API is running',
        'operations': len(Operation),
    })


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return jsonify({'error': f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)}MB.'}), 413


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return jsonify({'error': 'Internal server error'}), 500


def main():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    port = int(os.getenv("PORT", "5000"))
    logger.info(f"Starting Image Editor API on port {port}")
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=port, debug=False)


if __name__ == '__main__':
    main()
