"""
ATP Brackets - Flask data server
Serves the generated JSON files read-only to the browser app, plus a few
convenience endpoints built on top of them.
"""

import logging
import os
import re

from cachetools import TTLCache
from flask import Flask, jsonify, request, send_from_directory
from flask_cors import CORS

from .common_names import display_name
from .config import Config
from .storage import read_json

_ID_RE = re.compile(r'^[\w-]+$')


def create_app(data_dir=None):
    data_dir = os.path.abspath(data_dir or Config.OUTPUT_DIR)
    brackets_dir = os.path.join(data_dir, Config.BRACKETS_SUBDIR)

    app = Flask(__name__)
    app.config['DATA_DIR'] = data_dir
    CORS(app, origins="*", resources={r"/api/*": {"origins": "*"}})

    # Keep console output focused on warnings/errors instead of per-request 200 logs.
    if Config.QUIET_HTTP_LOGS:
        logging.getLogger('werkzeug').setLevel(logging.WARNING)
        app.logger.setLevel(logging.WARNING)

    data_cache = TTLCache(maxsize=16, ttl=Config.CACHE_DATA_FILES)

    def load(filename):
        data = data_cache.get(filename)
        if data is None:
            data = read_json(os.path.join(data_dir, filename))
            data_cache[filename] = data
        return data

    def serve_file(directory, filename, not_found_message='Not found'):
        try:
            return send_from_directory(directory, filename)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': not_found_message}), 404

    # ============== Static data files ==============

    @app.route('/data/<path:filename>')
    def serve_data(filename):
        """Serve players/tournaments/matches/derived and bracket files"""
        return serve_file(data_dir, filename, 'Data file not found')

    # ============== REST API Routes ==============

    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint"""
        return jsonify({'status': 'healthy', 'message': 'ATP Brackets data server is running'})

    @app.route('/api/tournaments', methods=['GET'])
    def get_tournaments():
        """Tournament list with display names, optionally filtered"""
        year = request.args.get('year', type=int)
        series = request.args.get('series')
        surface = request.args.get('surface')
        try:
            tournaments = load(Config.TOURNAMENTS_FILE)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': 'tournaments.json not generated yet'}), 404

        out = []
        for tournament in tournaments:
            if year is not None and tournament.get('year') != year:
                continue
            if series and tournament.get('series') != series:
                continue
            if surface and tournament.get('surface') != surface:
                continue
            out.append({**tournament, 'displayName': display_name(tournament)})
        return jsonify({'success': True, 'data': out, 'count': len(out)})

    @app.route('/api/tournaments/<tournament_id>/bracket', methods=['GET'])
    def get_tournament_bracket(tournament_id):
        """Reconstructed bracket tree for one tournament"""
        path = os.path.join(brackets_dir, f'{tournament_id}.json')
        if not _ID_RE.match(tournament_id) or not os.path.exists(path):
            return jsonify({'success': False, 'error': 'Bracket not found'}), 404
        return jsonify({'success': True, 'data': read_json(path)})

    @app.route('/api/players/<player_id>/matches', methods=['GET'])
    def get_player_matches(player_id):
        """Every match the player won or lost"""
        try:
            players = load(Config.PLAYERS_FILE)
            matches = load(Config.MATCHES_FILE)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': 'data files not generated yet'}), 404

        player = next((p for p in players if p.get('id') == player_id), None)
        if not player:
            return jsonify({'success': False, 'error': 'Player not found'}), 404
        played = [m for m in matches if player_id in (m.get('winnerId'), m.get('loserId'))]
        return jsonify({'success': True, 'player': player, 'data': played, 'count': len(played)})

    @app.route('/api/h2h', methods=['GET'])
    def get_head_to_head():
        """Head-to-head record between two players"""
        p1 = (request.args.get('p1') or '').strip()
        p2 = (request.args.get('p2') or '').strip()
        if not p1 or not p2 or p1 == p2:
            return jsonify({'success': False, 'error': 'p1 and p2 must be two different player ids'}), 400
        try:
            matches = load(Config.MATCHES_FILE)
        except FileNotFoundError:
            return jsonify({'success': False, 'error': 'matches.json not generated yet'}), 404

        meetings = [
            m for m in matches
            if {m.get('winnerId'), m.get('loserId')} == {p1, p2}
        ]
        meetings.sort(key=lambda m: m.get('date') or '')
        return jsonify({
            'success': True,
            'data': {
                'p1': p1,
                'p2': p2,
                'p1_wins': sum(1 for m in meetings if m.get('winnerId') == p1),
                'p2_wins': sum(1 for m in meetings if m.get('winnerId') == p2),
                'matches': meetings,
            }
        })

    # ============== Error Handlers ==============

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'success': False, 'error': 'Resource not found'}), 404

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({'success': False, 'error': 'Internal server error'}), 500

    return app


def run_server(data_dir=None, host=None, port=None):
    app = create_app(data_dir)
    print("=" * 50)
    print("ATP Brackets Data Server")
    print("=" * 50)
    print(f"Serving {app.config['DATA_DIR']} on http://{host or Config.HOST}:{port or Config.PORT}")
    print("=" * 50)
    app.run(host=host or Config.HOST, port=port or Config.PORT, debug=Config.DEBUG)
