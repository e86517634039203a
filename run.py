from flownet.config import configure_logging
from flownet.graph import FlowNetwork


def main():
    configure_logging()

    graph = [
        [0, 7, 5, 0, 0, 0],
        [0, 0, 5, 4, 0, 0],
        [0, 0, 0, 6, 4, 0],
        [0, 0, 0, 0, 2, 5],
        [0, 0, 0, 0, 0, 6],
        [0, 0, 0, 0, 0, 0],
    ]
    network = FlowNetwork(0, 5, graph)
    while network.find_path():
        pass
    print(f"Max flow: {network.get_max_flow()}")

if __name__ == "__main__":
    main()
