"""ContentFlow card — single-page 600x600 dashboard driven by /api/dashboard."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

dashboard_router = APIRouter()

DASHBOARD_HTML = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>ContentFlow — AI Marketing Suite</title>
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;700;900&display=swap" rel="stylesheet">
    <style>
        :root {
            --color-bg-page: #020617;
            --color-bg-card: #0f172a;
            --color-border: rgba(255, 255, 255, 0.1);
            --color-border-subtle: rgba(255, 255, 255, 0.05);
            --color-text: #ffffff;
            --color-text-muted: #94a3b8;
            --color-text-faint: #64748b;
            --color-primary: #4f46e5;
            --color-primary-soft: #818cf8;
            --color-success: #34d399;

            --cyan: #22d3ee;
            --purple: #c084fc;
            --pink: #f472b6;
            --emerald: #34d399;
            --blue: #60a5fa;
            --indigo: #818cf8;
            --slate: #94a3b8;

            --font-sans: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
            --radius-lg: 12px;
            --radius-xl: 16px;
        }

        *, *::before, *::after { margin: 0; padding: 0; box-sizing: border-box; }

        body {
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            background: var(--color-bg-page);
            font-family: var(--font-sans);
            color: var(--color-text);
            padding: 16px;
        }

        .card {
            width: 600px;
            height: 600px;
            overflow: hidden;
            display: flex;
            flex-direction: column;
            background: radial-gradient(circle at 50% 0%, rgba(99, 102, 241, 0.15), transparent 50%), var(--color-bg-card);
            border-radius: var(--radius-xl);
            box-shadow: 0 25px 50px rgba(0, 0, 0, 0.5), 0 0 0 1px var(--color-border);
        }

        header {
            height: 56px;
            padding: 0 16px;
            display: flex;
            align-items: center;
            justify-content: space-between;
            border-bottom: 1px solid var(--color-border-subtle);
        }

        .brand { display: flex; align-items: center; gap: 8px; }
        .brand-mark {
            width: 32px; height: 32px; border-radius: 8px;
            background: var(--color-primary);
            display: flex; align-items: center; justify-content: center;
            font-weight: 900;
        }
        .brand h1 { font-size: 14px; font-weight: 900; letter-spacing: -0.02em; }
        .brand p { font-size: 9px; color: var(--color-primary-soft); font-weight: 700; text-transform: uppercase; letter-spacing: 0.15em; }

        .btn-generate {
            background: var(--color-primary);
            color: #fff;
            border: none;
            border-radius: 9999px;
            padding: 8px 16px;
            font-size: 11px;
            font-weight: 700;
            cursor: pointer;
        }
        .btn-generate:disabled { opacity: 0.5; cursor: default; }

        main { flex: 1; padding: 20px; display: flex; flex-direction: column; gap: 20px; overflow: hidden; }

        .stats { display: grid; grid-template-columns: repeat(3, 1fr); gap: 12px; }
        .stat {
            background: rgba(255, 255, 255, 0.05);
            border: 1px solid var(--color-border);
            border-radius: var(--radius-lg);
            padding: 12px;
        }
        .stat-change { font-size: 10px; font-weight: 700; color: var(--color-success); float: right; }
        .stat-label { font-size: 10px; color: var(--color-text-muted); text-transform: uppercase; letter-spacing: 0.05em; margin-top: 10px; }
        .stat-value { font-size: 18px; font-weight: 900; }

        .panel {
            background: rgba(255, 255, 255, 0.05);
            border: 1px solid var(--color-border);
            border-radius: var(--radius-xl);
            padding: 16px;
        }
        .panel-head { display: flex; justify-content: space-between; margin-bottom: 14px; }
        .panel-head h2 { font-size: 12px; text-transform: uppercase; letter-spacing: 0.1em; color: var(--color-text-muted); }
        .live { font-size: 10px; font-weight: 700; color: var(--color-success); }

        .stages { display: grid; grid-template-columns: repeat(4, 1fr); gap: 12px; }
        .stage {
            background: none; border: none; color: inherit; cursor: pointer;
            display: flex; flex-direction: column; align-items: center; gap: 6px;
            padding: 8px; border-radius: var(--radius-lg);
        }
        .stage.active { background: rgba(255, 255, 255, 0.05); }
        .stage-dot {
            width: 36px; height: 36px; border-radius: 50%;
            background: #1e293b; border: 1px solid var(--color-border);
        }
        .stage.active .stage-dot { background: var(--accent); border-color: var(--accent); }
        .stage-title { font-size: 10px; font-weight: 700; }
        .stage-desc { font-size: 8px; color: var(--color-text-faint); }

        .detail {
            margin-top: 16px; padding: 14px; border-radius: var(--radius-lg);
            background: rgba(30, 41, 59, 0.5); border: 1px solid var(--color-border-subtle);
        }
        .detail-row { display: flex; gap: 16px; align-items: center; }
        .detail-main { flex: 1; }
        .detail-head { display: flex; justify-content: space-between; align-items: flex-end; margin-bottom: 8px; }
        .detail-head h3 { font-size: 14px; font-weight: 900; }
        .detail-head span { font-size: 10px; font-family: monospace; color: var(--color-text-muted); }
        .bar { height: 6px; background: var(--color-border-subtle); border-radius: 9999px; overflow: hidden; }
        .bar-fill { height: 100%; background: linear-gradient(90deg, #6366f1, #22d3ee); transition: width 300ms; }
        .detail-metric { text-align: right; border-left: 1px solid var(--color-border); padding-left: 16px; min-width: 80px; }
        .detail-metric p { font-size: 9px; text-transform: uppercase; color: var(--color-text-faint); font-weight: 700; }
        .detail-metric strong { font-size: 18px; font-weight: 900; }

        .channels { margin-top: 12px; padding-top: 10px; border-top: 1px solid var(--color-border-subtle); }
        .channels > p { font-size: 9px; text-transform: uppercase; letter-spacing: 0.2em; color: var(--color-primary-soft); font-weight: 900; margin-bottom: 10px; }
        .channel-row { display: flex; gap: 8px; }
        .channel {
            font-size: 10px; font-weight: 700; cursor: pointer;
            padding: 6px 10px; border-radius: 8px;
            background: rgba(255, 255, 255, 0.05); border: 1px solid var(--color-border-subtle);
            color: var(--color-text-muted);
        }
        .channel.selected { background: rgba(255, 255, 255, 0.1); border-color: rgba(99, 102, 241, 0.5); color: #fff; }

        .insight {
            display: flex; gap: 16px; align-items: flex-start;
            background: rgba(49, 46, 129, 0.2); border: 1px solid rgba(99, 102, 241, 0.2);
            border-radius: var(--radius-xl); padding: 16px;
        }
        .insight h4 { font-size: 10px; font-weight: 900; color: var(--color-primary-soft); text-transform: uppercase; letter-spacing: 0.1em; margin-bottom: 4px; }
        .insight p { font-size: 12px; font-style: italic; color: rgba(224, 231, 255, 0.8); line-height: 1.6; }
        .insight.pending p { opacity: 0.4; }

        footer {
            height: 40px; padding: 0 16px;
            display: flex; align-items: center; justify-content: space-between;
            border-top: 1px solid var(--color-border-subtle);
            font-size: 8px; text-transform: uppercase; letter-spacing: 0.2em; color: var(--color-text-faint);
        }
        footer .version { color: var(--color-primary-soft); }
    </style>
</head>
<body>
<div class="card">
    <header>
        <div class="brand">
            <div class="brand-mark">⚡</div>
            <div><h1 id="appTitle">CONTENTFLOW</h1><p id="appSubtitle">AI Marketing Suite</p></div>
        </div>
        <button class="btn-generate" id="generateBtn" onclick="App.generate()">Generate Insight</button>
    </header>

    <main>
        <div class="stats" id="stats"></div>

        <div class="panel">
            <div class="panel-head"><h2 id="pipelineTitle">Campaign Pipeline</h2><span class="live">● Live</span></div>
            <div class="stages" id="stages"></div>
            <div class="detail" id="detail"></div>
        </div>

        <div class="insight" id="insight">
            <div>
                <h4 id="insightTitle">Gemini Optimization Insight</h4>
                <p id="insightText"></p>
            </div>
        </div>
    </main>

    <footer>
        <span id="footerLatency">System Latency: 42ms</span>
        <span class="version" id="footerVersion">v2.4.0-Stable</span>
    </footer>
</div>

<script>
const App = {
    state: { view: null, socket: null },

    async api(method, path) {
        const res = await fetch(path, { method });
        if (!res.ok) {
            console.warn(method + ' ' + path + ' failed: ' + res.status);
            return null;
        }
        return res.json();
    },

    hint(type) {
        return (this.state.view.render_hints || []).find(h => h.type === type);
    },

    renderStats(stats) {
        document.getElementById('stats').innerHTML = stats.metrics.map(m => `
            <div class="stat">
                <span class="stat-change">↑ ${m.change}</span>
                <p class="stat-label">${m.label}</p>
                <div class="stat-value" style="color: var(--${m.color})">${m.value}</div>
            </div>`).join('');
    },

    renderPipeline(pipeline, channels) {
        document.getElementById('pipelineTitle').textContent = pipeline.title;
        document.getElementById('stages').innerHTML = pipeline.stages.map(s => `
            <button class="stage ${s.active ? 'active' : ''}" style="--accent: var(--${s.color})"
                    onclick="App.selectStage('${s.id}')">
                <div class="stage-dot"></div>
                <p class="stage-title">${s.title}</p>
                <p class="stage-desc">${s.description}</p>
            </button>`).join('');

        const d = pipeline.detail;
        let html = `
            <div class="detail-row">
                <div class="detail-main">
                    <div class="detail-head"><h3>${d.heading}</h3><span>${d.progress_label}</span></div>
                    <div class="bar"><div class="bar-fill" style="width: ${d.progress}%"></div></div>
                </div>
                <div class="detail-metric"><p>${d.metric}</p><strong>${d.metric_value}</strong></div>
            </div>`;
        if (channels) {
            html += `<div class="channels"><p>${channels.title}</p><div class="channel-row">` +
                channels.channels.map(c => `
                    <button class="channel ${c.selected ? 'selected' : ''}"
                            onclick="App.toggleChannel('${c.id}')">${c.name}</button>`).join('') +
                `</div></div>`;
        }
        document.getElementById('detail').innerHTML = html;
    },

    renderInsight(insight) {
        document.getElementById('insightTitle').textContent = insight.title;
        document.getElementById('insightText').textContent = '"' + insight.text + '"';
        document.getElementById('insight').classList.toggle('pending', insight.pending);
        const btn = document.getElementById('generateBtn');
        btn.textContent = insight.button.label;
        btn.disabled = insight.button.disabled;
    },

    render(view) {
        if (!view) return;
        this.state.view = view;
        document.getElementById('appTitle').textContent = view.header.title;
        document.getElementById('appSubtitle').textContent = view.header.subtitle;
        document.getElementById('footerLatency').textContent = view.footer.latency;
        document.getElementById('footerVersion').textContent = view.footer.version;
        this.renderStats(this.hint('metrics_grid'));
        this.renderPipeline(this.hint('pipeline_status'), this.hint('channel_picker'));
        this.renderInsight(this.hint('insight'));
    },

    async refresh() {
        this.render(await this.api('GET', '/api/dashboard'));
    },

    async selectStage(id) {
        this.render(await this.api('POST', '/api/stages/' + id));
    },

    async toggleChannel(id) {
        this.render(await this.api('POST', '/api/channels/' + id + '/toggle'));
    },

    async generate() {
        const btn = document.getElementById('generateBtn');
        btn.disabled = true;
        btn.textContent = 'Analyzing...';
        document.getElementById('insight').classList.add('pending');
        const view = await this.api('POST', '/api/insight');
        if (view) this.render(view); else await this.refresh();
    },

    connectMetrics() {
        const proto = location.protocol === 'https:' ? 'wss:' : 'ws:';
        const ws = new WebSocket(proto + '//' + location.host + '/ws/metrics');
        ws.onmessage = () => this.refresh();
        ws.onclose = () => setTimeout(() => this.connectMetrics(), 3000);
        this.state.socket = ws;
    },

    async init() {
        await this.refresh();
        this.connectMetrics();
    },
};

document.addEventListener('DOMContentLoaded', () => App.init());
</script>
</body>
</html>
"""


@dashboard_router.get("/", response_class=HTMLResponse)
async def dashboard():
    return DASHBOARD_HTML
