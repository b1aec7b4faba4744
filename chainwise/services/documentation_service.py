"""Documentation snippets for chat prompts, looked up through Tavily search."""
import asyncio
from dataclasses import dataclass

from loguru import logger
from tavily import AsyncTavilyClient

from chainwise.core.config import settings

COMMON_LIBRARIES: dict[str, str] = {
    "bitcoin": "/bitcoin/bitcoin",
    "ethereum": "/ethereum/go-ethereum",
    "web3": "/web3/web3.js",
    "ethers": "/ethers-io/ethers.js",
    "solidity": "/ethereum/solidity",
    "truffle": "/trufflesuite/truffle",
    "hardhat": "/nomiclabs/hardhat",
    "metamask": "/metamask/metamask-extension",
    "openzeppelin": "/openzeppelin/openzeppelin-contracts",
    "chainlink": "/smartcontractkit/chainlink",
    "polygon": "/maticnetwork/bor",
    "avalanche": "/ava-labs/avalanchego",
    "binance": "/binance-chain/bsc",
    "cardano": "/input-output-hk/cardano-node",
    "polkadot": "/paritytech/polkadot",
    "solana": "/solana-labs/solana",
    "cosmos": "/cosmos/cosmos-sdk",
    "near": "/near/nearcore",
    "algorand": "/algorand/go-algorand",
}

# (keywords, topic, library hints); first match wins
TOPIC_RULES: list[tuple[tuple[str, ...], str, tuple[str, ...]]] = [
    (("smart contract", "solidity"), "smart contracts", ("solidity", "openzeppelin", "hardhat")),
    (("defi", "yield", "liquidity"), "decentralized finance", ("web3", "ethers", "chainlink")),
    (("nft", "erc721"), "non-fungible tokens", ("openzeppelin", "ethers")),
    (("wallet", "metamask"), "wallet integration", ("web3", "ethers", "metamask")),
    (("bitcoin", "btc"), "bitcoin", ("bitcoin",)),
    (("ethereum", "eth"), "ethereum", ("ethereum", "web3", "ethers")),
]

SNIPPET_LIMIT = 1000


@dataclass
class LibraryDocs:
    content: str
    source: str


def detect_topic(message: str) -> tuple[str, tuple[str, ...]] | None:
    lower_message = message.lower()
    for keywords, topic, hints in TOPIC_RULES:
        if any(keyword in lower_message for keyword in keywords):
            return topic, hints
    return None


class DocumentationService:
    def __init__(
        self, search_client: AsyncTavilyClient | None, timeout: float | None = None
    ):
        self._search_client = search_client
        self._timeout = timeout if timeout is not None else settings.DOCS_TIMEOUT

    async def resolve_library_id(self, library_name: str) -> str | None:
        return COMMON_LIBRARIES.get(library_name.lower())

    async def get_library_docs(
        self, library_id: str, topic: str | None = None
    ) -> LibraryDocs | None:
        """Search the web for documentation on ``library_id``; ``None`` on any failure."""
        if self._search_client is None:
            return None

        library = library_id.strip("/").split("/")[-1]
        query = " ".join(part for part in (library, topic, "documentation") if part)
        try:
            res = await asyncio.wait_for(
                self._search_client.search(query=query, max_results=3),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Documentation search timed out for {library_id}")
            return None
        except Exception as e:
            logger.error(f"Error getting library docs for {library_id}: {e}")
            return None

        results = res.get("results", []) if isinstance(res, dict) else []
        for result in results:
            content = result.get("content") or result.get("raw_content") or ""
            if content:
                return LibraryDocs(content=content, source=library_id)
        return None

    async def get_contextual_info(self, persona: str, message: str) -> str:
        """Documentation fragment for the chat prompt, or "" when nothing applies."""
        detected = detect_topic(message)
        if detected is None:
            return ""
        topic, hints = detected

        try:
            hint = hints[0]
            library_id = await self.resolve_library_id(hint)
            if library_id is None:
                return ""
            docs = await self.get_library_docs(library_id, topic)
            if docs is None or not docs.content:
                return ""
            logger.info(f"Documentation context for {persona} from {hint}")
            return (
                f"\n\nRelevant documentation from {hint}:\n"
                f"{docs.content[:SNIPPET_LIMIT]}..."
            )
        except Exception as e:
            logger.error(f"Error getting contextual info: {e}")
            return ""
