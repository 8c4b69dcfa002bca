# src/bptree_map/viz/visualizer.py
"""
Visualizador sencillo que usa networkx + matplotlib para dibujar el B+ Tree por niveles.
Las aristas padre->hijo se dibujan en gris y la cadena de hojas (next) en rojo.
"""
import networkx as nx
import matplotlib.pyplot as plt


def _level_layout(G):
    # x: posición dentro del nivel, y: -profundidad
    by_depth = {}
    for n, data in G.nodes(data=True):
        by_depth.setdefault(data["depth"], []).append(n)
    pos = {}
    for depth, nodes in by_depth.items():
        width = len(nodes)
        for i, n in enumerate(sorted(nodes)):
            pos[n] = ((i + 1) / (width + 1), -depth)
    return pos


def visualize_tree(tree_map, title="B+ Tree", out_path=None):
    """
    tree_map: BPlusTreeMap (o cualquier objeto con to_networkx())
    out_path: si se da, guarda la figura ahí; si no, plt.show()
    Devuelve la figura de matplotlib.
    """
    G = tree_map.to_networkx()
    fig = plt.figure(figsize=(10, 6))
    if len(G.nodes) > 0:
        pos = _level_layout(G)
        child_edges = [(u, v) for u, v, d in G.edges(data=True) if d["kind"] == "child"]
        next_edges = [(u, v) for u, v, d in G.edges(data=True) if d["kind"] == "next"]
        leaves = [n for n, d in G.nodes(data=True) if d["is_leaf"]]
        internal = [n for n, d in G.nodes(data=True) if not d["is_leaf"]]

        nx.draw_networkx_nodes(G, pos, nodelist=internal, node_shape="s", node_size=900, node_color="lightsteelblue")
        nx.draw_networkx_nodes(G, pos, nodelist=leaves, node_shape="s", node_size=900, node_color="lightgreen")
        nx.draw_networkx_edges(G, pos, edgelist=child_edges, width=1.0, edge_color="gray", arrows=False)
        nx.draw_networkx_edges(G, pos, edgelist=next_edges, width=1.5, edge_color="red",
                               style="dashed", connectionstyle="arc3,rad=0.2")
        # etiquetas con las claves solo si el árbol es pequeño
        if len(G.nodes) < 200:
            labels = {n: ",".join(str(k) for k in d["keys"]) for n, d in G.nodes(data=True)}
            nx.draw_networkx_labels(G, pos, labels=labels, font_size=7)

    plt.title(title)
    plt.axis('off')
    if out_path is not None:
        fig.savefig(out_path)
        plt.close(fig)
    else:
        plt.show()
    return fig
