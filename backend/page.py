"""
HTML for the game page.

The page only forwards input and shows frames: it posts keys, button presses
and visibility changes to the API and reloads the rendered frame every step.
"""

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Snake</title>
  <style>
    body { background: #0f0f1a; color: #e5e7eb; font-family: sans-serif; text-align: center; margin: 0; }
    #wrap { max-width: 640px; margin: 0 auto; padding: 16px; }
    #board { image-rendering: pixelated; border-radius: 6px; }
    .scores span { margin: 0 12px; font-size: 18px; }
    button { margin: 6px; padding: 8px 16px; font-size: 16px; }
    button.game-over { background: #ff6b6b; color: #fff; }
    #touchControls { display: none; flex-direction: column; align-items: center; }
  </style>
</head>
<body>
  <div id="wrap">
    <div class="scores">
      <span>Score: <b id="score">0</b></span>
      <span>High Score: <b id="highScore">{{ high_score }}</b></span>
    </div>
    <img id="board" alt="snake board" width="{{ canvas_px }}" height="{{ canvas_px }}">
    <div>
      <button id="startBtn">Start</button>
      <button id="pauseBtn">Pause</button>
      <button id="resetBtn">Reset</button>
    </div>
    <div id="touchControls" aria-hidden="true">
      <button data-dir="up">&#9650;</button>
      <div>
        <button data-dir="left">&#9664;</button>
        <button data-dir="down">&#9660;</button>
        <button data-dir="right">&#9654;</button>
      </div>
    </div>
  </div>
  <script>
    const STEP_MS = {{ step_ms }};
    const TILE_COUNT = {{ tile_count }};
    const RESPONSIVE = {{ 'true' if responsive else 'false' }};
    const board = document.getElementById('board');
    const wrap = document.getElementById('wrap');
    let canvasPx = {{ canvas_px }};
    let resizeTimer = null;

    function post(path, body) {
      return fetch(path, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {})
      }).then(r => r.json()).then(show);
    }

    function show(state) {
      if (!state || state.error) return;
      document.getElementById('score').textContent = state.score;
      document.getElementById('highScore').textContent = state.high_score;
      const startBtn = document.getElementById('startBtn');
      startBtn.textContent = state.start_label;
      startBtn.classList.toggle('game-over', state.run_state === 'over');
    }

    function resize() {
      if (RESPONSIVE) {
        const available = Math.min(wrap.clientWidth, window.innerHeight * 0.6);
        const cell = Math.max({{ min_cell_size }}, Math.floor(available / TILE_COUNT));
        canvasPx = cell * TILE_COUNT;
      }
      board.width = canvasPx;
      board.height = canvasPx;
      const touch = document.getElementById('touchControls');
      const small = window.innerWidth <= 600;
      touch.style.display = small ? 'flex' : 'none';
      touch.setAttribute('aria-hidden', small ? 'false' : 'true');
    }

    function frame() {
      const ratio = window.devicePixelRatio || 1;
      board.src = '/api/frame.png?size=' + canvasPx + '&ratio=' + ratio + '&t=' + Date.now();
      fetch('/api/state').then(r => r.json()).then(show);
    }

    document.addEventListener('keydown', (e) => {
      const key = e.key.toLowerCase();
      if (['arrowup', 'arrowdown', 'arrowleft', 'arrowright', 'w', 'a', 's', 'd'].includes(key)) {
        e.preventDefault();
        post('/api/input', {key: key});
      }
    });
    document.getElementById('startBtn').addEventListener('click', () => post('/api/start'));
    document.getElementById('pauseBtn').addEventListener('click', () => post('/api/pause'));
    document.getElementById('resetBtn').addEventListener('click', () => post('/api/reset'));
    document.querySelectorAll('#touchControls [data-dir]').forEach(btn => {
      btn.addEventListener('touchstart', (e) => { e.preventDefault(); post('/api/input', {button: btn.dataset.dir}); });
      btn.addEventListener('mousedown', () => post('/api/input', {button: btn.dataset.dir}));
    });
    document.addEventListener('visibilitychange', () => post('/api/visibility', {hidden: document.hidden}));
    window.addEventListener('resize', () => {
      clearTimeout(resizeTimer);
      resizeTimer = setTimeout(resize, 120);
    });

    resize();
    frame();
    setInterval(frame, STEP_MS);
  </script>
</body>
</html>
"""
