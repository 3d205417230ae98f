from datetime import date, timedelta
from typing import Dict, Optional, Tuple

import networkx as nx
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .pipeline import Analysis
from .report import schedule_frame


def condensation_digraph(analysis: Analysis) -> nx.DiGraph:
    dag = analysis.condensation
    G = nx.DiGraph()
    for c in dag.components:
        G.add_node(c.id, weight=dag.weight(c.id), tasks=list(c.task_ids))
    for c in dag.components:
        for s in dag.successors(c.id):
            G.add_edge(c.id, s)
    return G


def layered_layout(G: nx.DiGraph) -> Dict[int, Tuple[float, float]]:
    """Components left to right by topological generation, centred vertically."""
    pos = {}
    for level, nodes in enumerate(nx.topological_generations(G)):
        nodes = sorted(nodes)
        count = len(nodes)
        for i, n in enumerate(nodes):
            pos[n] = (float(level), (i - (count - 1) / 2) * 2.0)
    return pos


def create_flow_chart(analysis: Analysis) -> go.Figure:
    G = condensation_digraph(analysis)
    pos = layered_layout(G)
    critical = set(analysis.critical_path.path)

    edge_x, edge_y = [], []
    for u, v in G.edges():
        x0, y0 = pos[u]
        x1, y1 = pos[v]
        edge_x.extend([x0, x1, None])
        edge_y.extend([y0, y1, None])

    node_ids = list(pos)
    node_color, node_text = [], []
    for n in node_ids:
        data = G.nodes[n]
        if n in critical:
            node_color.append('#FF4B4B')
        elif len(data['tasks']) > 1:
            node_color.append('#1f77b4')
        else:
            node_color.append('#DDDDDD')
        node_text.append(f"<b>Component {n}</b><br>Weight: {data['weight']}<br>Tasks: {', '.join(data['tasks'])}")

    fig = go.Figure()
    fig.add_trace(go.Scatter(x=edge_x, y=edge_y, mode='lines', hoverinfo='none',
                             line=dict(width=1, color='#888')))
    fig.add_trace(go.Scatter(
        x=[pos[n][0] for n in node_ids], y=[pos[n][1] for n in node_ids],
        mode='markers+text', text=[f'C{n}' for n in node_ids], textposition='top center',
        hoverinfo='text', hovertext=node_text,
        marker=dict(color=node_color, size=[12 + 4 * len(G.nodes[n]['tasks']) for n in node_ids], line_width=2),
    ))
    fig.update_layout(
        title='Condensation Flow (critical path in red)',
        showlegend=False,
        hovermode='closest',
        margin=dict(b=0, l=0, r=0, t=40),
        xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig


def create_timeline_chart(analysis: Analysis, start: Optional[date] = None,
                          title: str = 'Component Timeline (earliest start)') -> go.Figure:
    """Gantt chart of the forward pass; one time unit is drawn as one day."""
    start = start or date.today()
    df = schedule_frame(analysis)
    df['Start'] = [pd.Timestamp(start + timedelta(days=int(es))) for es in df['es']]
    df['Finish'] = [pd.Timestamp(start + timedelta(days=int(ef))) for ef in df['ef']]
    df['Component'] = [f'C{c}: {t}' for c, t in zip(df['component'], df['tasks'])]
    df['Path'] = ['critical' if c else 'slack' for c in df['critical']]
    fig = px.timeline(df, x_start='Start', x_end='Finish', y='Component', color='Path', title=title)
    fig.update_yaxes(autorange='reversed')
    fig.update_layout(plot_bgcolor='rgba(0,0,0,0)', paper_bgcolor='rgba(0,0,0,0)')
    return fig
