import logging
import os

from flask import Flask, render_template, request, redirect, url_for, session, jsonify
from flask_socketio import SocketIO, emit

from logic import Difficulty, OutcomeKind, start_new_game

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.from_mapping(
    SECRET_KEY=os.environ.get('SECRET_KEY', 'secret_key'),  # Impostare SECRET_KEY in produzione
    DEFAULT_DIFFICULTY=os.environ.get('DEFAULT_DIFFICULTY', Difficulty.EASY.value),
)
socketio = SocketIO(app)

# Partite in corso per utente: {username: {'game': GameSession, 'history': [...]}}
game_data = {}

ORANGE = '#c86400'
GREEN = '#009600'
RED = '#c80000'
BLACK = '#000000'


def event_data(data):
    """Il payload di un evento Socket.IO, se non è un oggetto vale come vuoto."""
    return data if isinstance(data, dict) else {}


def render_outcome(outcome):
    """Messaggio e colore da mostrare per un esito."""
    kind = outcome.kind
    if kind is OutcomeKind.INVALID_INPUT:
        return 'Please enter a valid positive integer!', RED
    if kind is OutcomeKind.TOO_LOW:
        return 'Too small! Try again!', ORANGE
    if kind is OutcomeKind.TOO_HIGH:
        return 'Too large! Try again!', ORANGE
    if kind is OutcomeKind.CORRECT:
        return 'Congratulations, you guessed it!', GREEN
    if kind is OutcomeKind.EXHAUSTED_ATTEMPTS:
        return f'Game over! The answer was {outcome.secret}.', RED
    return 'The game is over. Start a new game.', BLACK


@app.route('/')
def index():
    return render_template('index.html')


@app.route('/start_game', methods=['POST'])
def start_game():
    username = (request.form.get('username') or '').strip()
    if username:
        session['username'] = username
        return jsonify({'success': True})
    else:
        return jsonify({'success': False, 'error': 'Please enter a username!'})


@app.route('/play')
def play():
    if 'username' not in session:
        return redirect(url_for('index'))
    default = Difficulty.from_choice(app.config['DEFAULT_DIFFICULTY'])
    return render_template('play.html', username=session['username'],
                           difficulties=list(Difficulty), default=default)


@socketio.on('start_game')
def start_game_socket(data=None):
    username = session.get('username')
    if not username:
        logger.warning("start_game without username")
        emit('error', {'message': 'You are not logged in!'})
        return
    difficulty = Difficulty.from_choice(event_data(data).get('difficulty'))
    game = start_new_game(difficulty)
    game_data[username] = {'game': game, 'history': []}
    low, high = difficulty.range()
    emit('game_started', {
        'message': f'Welcome {username}, new game started. Good luck!',
        'difficulty': difficulty.value,
        'low': low,
        'high': high,
        'remaining_attempts': game.remaining_attempts,
        'game_over': False,
    })


@socketio.on('guess')
def make_guess(data=None):
    username = session.get('username')
    if username not in game_data:
        logger.warning("guess with no game for %r", username)
        emit('error', {'message': 'No game in progress. Start a new game!'})
        return
    entry = game_data[username]
    game = entry['game']
    # Il testo viene passato così com'è, spazi compresi; un valore non testuale è un input non valido
    outcome = game.guess(event_data(data).get('guess', ''))
    if outcome.is_terminal:
        logger.info("Game of %s ended: %s with %d attempts left",
                    username, game.state.value, game.remaining_attempts)
    line = outcome.history_entry()
    if line is not None:
        entry['history'].append(line)
    message, color = render_outcome(outcome)
    payload = {
        'outcome': outcome.kind.value,
        'message': message,
        'color': color,
        'remaining_attempts': outcome.remaining_attempts,
        'history': list(entry['history']),
        'game_over': game.is_over,
        'state': game.state.value,
    }
    if outcome.kind is OutcomeKind.EXHAUSTED_ATTEMPTS:
        payload['secret'] = outcome.secret
    emit('result', payload)


if __name__ == '__main__':
    logging.basicConfig(
        level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    socketio.run(app, debug=True)
