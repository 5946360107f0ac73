# screens/finance/constants.py
from __future__ import annotations

from typing import Dict, List, Tuple

FEE_SERVICE = "SCHOOL FEES"

PAYMENT_INSTRUCTIONS: Dict[str, List[str]] = {
    "Pesalink": [
        "Log in to your mobile banking, USSD or internet banking platform",
        "Select PesaLink from the main menu",
        "Choose Send to Account",
        "Enter the Account Number: 1311863427",
        "Select the Receiving Bank: KCB BANK",
        "Enter the amount to pay",
        "Enter the Bill Reference / Narration: your application number",
        "Complete the transaction on your bank's platform",
        "Return to the portal and confirm the payment",
    ],
    "Standard Chartered Bank": [
        "Go to your bank app.",
        'Select "Pay Bill" option.',
        "Enter the business number and account number.",
    ],
    "Pesaflow Direct": [
        "Navigate to Pesaflow Direct on your device.",
        "Follow the prompts to complete payment.",
    ],
    "SBM Bank": [
        "Log in to your SBM account.",
        "Transfer the fee amount.",
        "Use the provided reference number.",
    ],
    "EcoBank": [
        "Open the EcoBank mobile app.",
        "Go to the payments section.",
        "Enter the required details and confirm.",
    ],
    "Sidian bank": [
        "Access your Sidian online banking.",
        "Process a transfer to the specified school account.",
    ],
    "Absa Bank": [
        "Go to your Absa banking platform.",
        "Initiate a fund transfer.",
        "Provide the necessary fee details and reference.",
    ],
    "Pesawise": [
        "Access your Pesawise dashboard.",
        "Make a payment to the school.",
        "Confirm transaction and get receipt.",
    ],
    "Consolidated Bank": [
        "Log into your Consolidated Bank account.",
        "Follow the payment instructions to pay school fees.",
    ],
    "Access Bank (KES)": [
        "Use your Access Bank mobile or online banking.",
        "Pay the fee amount and use the provided account details.",
    ],
    "Airtel Money": [
        "Dial *334#",
        'Select "Pay Bill"',
        "Enter Business Number: 878900",
        "Enter Account Number: Your Registration Number",
        "Enter Amount",
        "Enter your Airtel Money PIN",
        "Confirm the transaction.",
    ],
    "M-PESA": [
        "Go to your M-PESA Menu",
        'Select "Lipa na M-PESA"',
        'Select "Pay Bill"',
        "Enter Business Number: 878900",
        "Enter Account Number: Your Registration Number",
        "Enter Amount",
        "Enter your M-PESA PIN",
        "Confirm the transaction.",
    ],
    "Diamond Trust Bank": [
        "Log in to your DTB mobile or online banking.",
        "Initiate a payment transfer.",
        "Provide the school's account details and your student ID.",
    ],
    "Co-operative Bank (KES)": [
        "Go to your Co-op Bank account.",
        "Select the bill payment option.",
        "Enter the business number and account details.",
    ],
    "Family Bank": [
        "Access the Family Bank mobile app.",
        "Choose the pay bill function.",
        "Enter the required details for the school fees.",
    ],
    "I&M Bank": [
        "Log in to your I&M Bank portal.",
        "Make a direct transfer to the school account.",
        "Use your student ID as the reference.",
    ],
    "National Bank": [
        "Use the National Bank mobile or online platform.",
        "Go to the payment section and fill in the details.",
    ],
    "RTGS": [
        "Visit your bank branch or use online banking for a large transfer.",
        "Provide the necessary RTGS form with the school's bank details.",
        "The transfer will be processed in real-time.",
    ],
    "Kenya Commercial Bank": [
        "Go to your KCB mobile banking or branch.",
        "Use the pay bill option or make a direct deposit.",
        "Fill in your student number as the account number.",
    ],
    "Stanbic Bank": [
        "Log in to your Stanbic account.",
        "Go to the payments section to pay the school fees.",
    ],
    "JamboPay": [
        "Log in to your JamboPay account.",
        "Select the bill you want to pay and enter the amount.",
        "Use the provided reference number to complete the payment.",
    ],
    "TKash": [
        "Go to your Telkom T-Kash menu by dialing *160#",
        'Select "Pay Bill" option.',
        "Enter the business number and account details.",
        "Confirm the transaction with your T-Kash PIN.",
    ],
    "NCBA Bank": [
        "Log in to your NCBA Bank mobile app or online banking.",
        "Use the Lipa na M-Pesa business number or direct bank transfer.",
    ],
    "EQUITY BANK": [
        "Use your Equity Bank mobile or online banking.",
        "Navigate to the payments or transfers section.",
        "Use the pay bill option and enter the provided details.",
    ],
    "PostaPay": [
        "Visit the nearest PostaPay agent or branch.",
        "Inform them you wish to pay school fees and provide the details.",
    ],
    "Debit/Credit/Prepaid Card": [
        'Click on the "Pay Now" button on the portal.',
        "You will be redirected to a secure payment gateway.",
        "Enter your card details and complete the transaction.",
    ],
}

# M-PESA is still a manual pay bill flow
PAYMENT_NOTES: Dict[str, str] = {
    "M-PESA": "This is a manual process. Keep the M-PESA confirmation message as proof of payment.",
}

PAYMENT_TYPES: Tuple[str, ...] = ("Mpesa", "Airtel", "Bank Transfer", "Card", "PayPal")

# payment type -> detail fields collected when a school registers the method
PAYMENT_DETAIL_FIELDS: Dict[str, Tuple[str, ...]] = {
    "Mpesa": ("Paybill", "Account Number"),
    "Airtel": ("Airtel Number", "Reference"),
    "Bank Transfer": ("Bank Name", "Bank Account Number"),
    "Card": ("Accepted Cards",),
    "PayPal": ("PayPal Email",),
}
